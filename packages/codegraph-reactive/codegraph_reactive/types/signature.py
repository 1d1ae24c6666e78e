"""Method Signature - Domain Layer.

A MethodSignature is the return type plus the ordered parameter types of one
declared interface method. It is produced by introspection (runtime or
source), consumed by the detector, and then discarded.

Type identifiers are fully qualified raw type names:
    - AsyncIterator[User] → "collections.abc.AsyncIterator"
    - asyncio.Future[None] → "asyncio.Future"
    - int → "int"
"""

from dataclasses import dataclass

TypeId = str

# Identifier used when a return or parameter annotation is missing
ANY_TYPE: TypeId = "typing.Any"


@dataclass(frozen=True, slots=True)
class MethodSignature:
    """One declared method of an interface.

    Attributes:
        name: Method name
        return_type: Raw return type identifier
        parameter_types: Raw parameter type identifiers, in declaration order
            (the receiver parameter of instance/class methods is excluded)
        declaring_type: Qualified name of the class that declares the method
    """

    name: str
    return_type: TypeId
    parameter_types: tuple[TypeId, ...] = ()
    declaring_type: str | None = None

    def __post_init__(self) -> None:
        # Accept any sequence but store a tuple so signatures stay hashable
        if not isinstance(self.parameter_types, tuple):
            object.__setattr__(self, "parameter_types", tuple(self.parameter_types))

    @property
    def type_ids(self) -> tuple[TypeId, ...]:
        """Return type followed by parameter types."""
        return (self.return_type, *self.parameter_types)

    def __str__(self) -> str:
        params = ", ".join(self.parameter_types)
        return f"{self.name}({params}) -> {self.return_type}"
