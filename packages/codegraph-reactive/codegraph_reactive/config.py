"""codegraph-reactive Configuration.

Environment variables use the CODEGRAPH_REACTIVE_ prefix.
Example: CODEGRAPH_REACTIVE_DISABLED_LIBRARIES='["reactivex"]'
"""

from typing import Literal

from pydantic import Field, ValidationError, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict, SettingsError

from codegraph_reactive.errors import ConfigurationError


class ReactiveSettings(BaseSettings):
    """
    Settings for wrapper registry construction, introspection and logging.

    List values are read from the environment as JSON arrays.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_prefix="CODEGRAPH_REACTIVE_",
        extra="ignore",
    )

    # Registry
    disabled_libraries: list[str] = Field(
        default_factory=list,
        description="Reactive libraries whose wrapper types are not recognized (e.g. ['rx']).",
    )
    extra_wrapper_types: list[str] = Field(
        default_factory=list,
        description="Additional fully qualified type names treated as reactive wrappers.",
    )

    # Introspection
    include_inherited: bool = Field(
        default=True,
        description="Include methods declared on base classes/protocols.",
    )

    # Logging
    log_level: str = Field(default="INFO", description="Logging level.")
    log_format: Literal["json", "console"] = Field(default="console", description="Log renderer.")

    @field_validator("extra_wrapper_types")
    @classmethod
    def _strip_type_names(cls, value: list[str]) -> list[str]:
        return [name.strip() for name in value if name and name.strip()]

    @field_validator("log_level")
    @classmethod
    def _upper_level(cls, value: str) -> str:
        return value.upper()


def load_settings(**overrides) -> ReactiveSettings:
    """
    Read settings from the environment and `.env`.

    Raises:
        ConfigurationError: A value cannot be parsed or fails validation
    """
    try:
        return ReactiveSettings(**overrides)
    except ValidationError as e:
        fields = sorted({".".join(str(part) for part in error["loc"]) for error in e.errors()})
        raise ConfigurationError(f"Invalid settings: {', '.join(fields)}", fields=fields) from e
    except SettingsError as e:
        raise ConfigurationError(f"Invalid settings: {e}") from e
