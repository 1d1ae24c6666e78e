"""
Source Introspection (AST)

Builds MethodSignature sequences straight from Python source, without
importing it. Type names are resolved through the module's import table so
that `from typing import AsyncIterator` and `import asyncio` produce the same
identifiers as runtime introspection.

Constraints:
- Python only, standard library `ast`
- Only base classes defined in the same source are followed
- No evaluation of annotations
"""

import ast
import builtins
from pathlib import Path

from codegraph_reactive.errors import IntrospectionError
from codegraph_reactive.introspection.runtime import ASYNC_GENERATOR_TYPE, COROUTINE_TYPE, UNION_TYPE
from codegraph_reactive.logging import get_logger
from codegraph_reactive.types.normalizer import TypeNormalizer, default_normalizer
from codegraph_reactive.types.signature import ANY_TYPE, MethodSignature, TypeId

logger = get_logger(__name__)

# Security limit
MAX_FILE_SIZE_BYTES = 10 * 1024 * 1024  # 10MB

_SKIPPED_DECORATORS = frozenset(
    {
        "property",
        "functools.cached_property",
        "cached_property",
    }
)
_ANNOTATED = frozenset({"typing.Annotated", "typing_extensions.Annotated"})

_Method = tuple[ast.FunctionDef | ast.AsyncFunctionDef, bool]


class SourceIntrospector:
    """
    Source-level interface reader.

    Responsibilities:
    - Parse one module's source
    - Build its import table (module level and `if TYPE_CHECKING:` blocks)
    - Extract method signatures per top-level class
    """

    def __init__(
        self,
        source: str,
        module: str | None = None,
        normalizer: TypeNormalizer | None = None,
        filename: str = "<source>",
    ) -> None:
        """
        Args:
            source: Python source code
            module: Dotted module name used to qualify local class names
            normalizer: Type identifier normalizer
            filename: File name for error messages

        Raises:
            IntrospectionError: Source is too large or not valid Python
        """
        size = len(source.encode("utf-8"))
        if size > MAX_FILE_SIZE_BYTES:
            raise IntrospectionError(
                f"Source too large: {size} bytes (max: {MAX_FILE_SIZE_BYTES} bytes)",
                filename=filename,
            )

        try:
            self._tree = ast.parse(source, filename=filename)
        except SyntaxError as e:
            raise IntrospectionError(f"Cannot parse {filename}: {e.msg}", filename=filename, lineno=e.lineno) from e

        self.module = module
        self.filename = filename
        self._normalizer = normalizer or default_normalizer
        self._imports = self._build_import_table(self._tree)
        self._classes: dict[str, ast.ClassDef] = {
            node.name: node for node in self._tree.body if isinstance(node, ast.ClassDef)
        }

    @property
    def class_names(self) -> list[str]:
        return list(self._classes)

    def signatures(self, class_name: str, include_inherited: bool = True) -> list[MethodSignature]:
        """
        Method signatures of a top-level class.

        Raises:
            IntrospectionError: No such class in the source
        """
        if class_name not in self._classes:
            raise IntrospectionError(
                f"Class {class_name!r} not found in {self.filename}",
                class_name=class_name,
                filename=self.filename,
            )

        seen: set[str] = set()
        signatures: list[MethodSignature] = []
        for class_def in self._linearize(class_name, include_inherited):
            for name, method in self._methods(class_def).items():
                if name in seen:
                    continue
                seen.add(name)
                if method is None:
                    continue
                fn, has_receiver = method
                signatures.append(self._method_signature(fn, has_receiver, class_def.name))

        return signatures

    def scan(self, include_inherited: bool = True) -> dict[str, list[MethodSignature]]:
        """Signatures of every top-level class, keyed by class name."""
        return {name: self.signatures(name, include_inherited) for name in self._classes}

    # ------------------------------------------------------------------
    # Classes
    # ------------------------------------------------------------------

    def _linearize(self, class_name: str, include_inherited: bool) -> list[ast.ClassDef]:
        """Class followed by its locally defined bases (depth-first, no repeats)."""
        order: list[ast.ClassDef] = []
        visited: set[str] = set()

        def visit(name: str) -> None:
            if name in visited:
                return
            visited.add(name)
            class_def = self._classes[name]
            order.append(class_def)
            if not include_inherited:
                return
            for base in class_def.bases:
                base_name = _dotted_name(base.value if isinstance(base, ast.Subscript) else base)
                if base_name in self._classes:
                    visit(base_name)
                elif base_name:
                    logger.debug("base_class_not_followed", class_name=name, base=base_name)

        visit(class_name)
        return order

    def _methods(self, class_def: ast.ClassDef) -> dict[str, _Method | None]:
        # Later definitions replace earlier ones (overloads) but keep their position.
        # Properties and class attributes map to None: they hide base class methods of the same name.
        methods: dict[str, _Method | None] = {}

        for stmt in class_def.body:
            for name in _assigned_names(stmt):
                methods[name] = None
            if not isinstance(stmt, (ast.FunctionDef, ast.AsyncFunctionDef)):
                continue
            if stmt.name.startswith("__") and stmt.name.endswith("__"):
                continue

            decorators = {
                self._resolve(_dotted_name(d.func if isinstance(d, ast.Call) else d)) for d in stmt.decorator_list
            }
            if decorators & _SKIPPED_DECORATORS or any(
                d.endswith((".setter", ".getter", ".deleter")) for d in decorators
            ):
                methods[stmt.name] = None
                continue

            methods[stmt.name] = (stmt, "staticmethod" not in decorators)

        return methods

    # ------------------------------------------------------------------
    # Signatures
    # ------------------------------------------------------------------

    def _method_signature(
        self,
        fn: ast.FunctionDef | ast.AsyncFunctionDef,
        has_receiver: bool,
        class_name: str,
    ) -> MethodSignature:
        args = fn.args
        params: list[ast.arg] = [*args.posonlyargs, *args.args]
        if args.vararg:
            params.append(args.vararg)
        params.extend(args.kwonlyargs)
        if args.kwarg:
            params.append(args.kwarg)

        if has_receiver and params:
            params = params[1:]

        if isinstance(fn, ast.AsyncFunctionDef):
            return_type = ASYNC_GENERATOR_TYPE if _contains_yield(fn) else COROUTINE_TYPE
        else:
            return_type = self._annotation_id(fn.returns)

        return MethodSignature(
            name=fn.name,
            return_type=return_type,
            parameter_types=tuple(self._annotation_id(p.annotation) for p in params),
            declaring_type=f"{self.module}.{class_name}" if self.module else class_name,
        )

    def _annotation_id(self, node: ast.expr | None) -> TypeId:
        if node is None:
            return ANY_TYPE

        if isinstance(node, ast.Constant):
            if node.value is None:
                return "None"
            if isinstance(node.value, str):
                try:
                    parsed = ast.parse(node.value.strip(), mode="eval").body
                except SyntaxError:
                    return self._normalizer.normalize(node.value)
                return self._annotation_id(parsed)

        if isinstance(node, ast.BinOp) and isinstance(node.op, ast.BitOr):
            return UNION_TYPE

        if isinstance(node, ast.Subscript):
            head = self._annotation_id(node.value)
            if head in _ANNOTATED:
                inner = node.slice.elts[0] if isinstance(node.slice, ast.Tuple) else node.slice
                return self._annotation_id(inner)
            return head

        dotted = _dotted_name(node)
        if dotted:
            return self._normalizer.normalize(self._resolve(dotted))

        return self._normalizer.normalize(ast.unparse(node))

    def _resolve(self, dotted: str) -> str:
        """Resolve a dotted name through the import table and local classes."""
        if not dotted:
            return dotted

        head, _, rest = dotted.partition(".")
        if head in self._imports:
            base = self._imports[head]
            return f"{base}.{rest}" if rest else base

        if head in self._classes:
            return f"{self.module}.{dotted}" if self.module else dotted

        if not hasattr(builtins, head):
            logger.debug("name_unresolved", name=dotted, filename=self.filename)

        return dotted

    @staticmethod
    def _build_import_table(tree: ast.Module) -> dict[str, str]:
        table: dict[str, str] = {}

        statements: list[ast.stmt] = []
        for node in tree.body:
            statements.append(node)
            if isinstance(node, ast.If):
                statements.extend(node.body)
                statements.extend(node.orelse)
            elif isinstance(node, ast.Try):
                statements.extend(node.body)

        for node in statements:
            if isinstance(node, ast.Import):
                for alias in node.names:
                    if alias.asname:
                        table[alias.asname] = alias.name
                    else:
                        top = alias.name.split(".", 1)[0]
                        table[top] = top
            elif isinstance(node, ast.ImportFrom):
                base = "." * node.level + (node.module or "")
                for alias in node.names:
                    if alias.name == "*":
                        continue
                    bound = alias.asname or alias.name
                    table[bound] = f"{base}{alias.name}" if base.endswith(".") else f"{base}.{alias.name}"

        return table


def collect_source_signatures(
    source: str,
    class_name: str,
    module: str | None = None,
    include_inherited: bool = True,
    normalizer: TypeNormalizer | None = None,
) -> list[MethodSignature]:
    """Method signatures of `class_name` declared in `source`."""
    introspector = SourceIntrospector(source, module=module, normalizer=normalizer)
    return introspector.signatures(class_name, include_inherited)


def scan_source(
    source: str,
    module: str | None = None,
    include_inherited: bool = True,
    normalizer: TypeNormalizer | None = None,
) -> dict[str, list[MethodSignature]]:
    """Method signatures of every top-level class declared in `source`."""
    return SourceIntrospector(source, module=module, normalizer=normalizer).scan(include_inherited)


def scan_file(
    path: str | Path,
    module: str | None = None,
    include_inherited: bool = True,
    normalizer: TypeNormalizer | None = None,
) -> dict[str, list[MethodSignature]]:
    """
    Method signatures of every top-level class in a Python file.

    The module name defaults to the file stem.

    Raises:
        IntrospectionError: File cannot be read or parsed
    """
    path = Path(path)
    try:
        source = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        raise IntrospectionError(f"Cannot read {path}: {e}", filename=str(path)) from e

    introspector = SourceIntrospector(
        source,
        module=module or path.stem,
        normalizer=normalizer,
        filename=str(path),
    )
    return introspector.scan(include_inherited)


def _dotted_name(node: ast.expr) -> str:
    parts: list[str] = []
    while isinstance(node, ast.Attribute):
        parts.append(node.attr)
        node = node.value
    if not isinstance(node, ast.Name):
        return ""
    parts.append(node.id)
    return ".".join(reversed(parts))


def _assigned_names(stmt: ast.stmt) -> list[str]:
    """Class attributes bound by `x = ...` or `x: T = ...` (dunders excluded)."""
    if isinstance(stmt, ast.Assign):
        targets = stmt.targets
    elif isinstance(stmt, ast.AnnAssign) and stmt.value is not None:
        targets = [stmt.target]
    else:
        return []
    return [
        t.id for t in targets if isinstance(t, ast.Name) and not (t.id.startswith("__") and t.id.endswith("__"))
    ]


def _contains_yield(fn: ast.AsyncFunctionDef) -> bool:
    """Whether the function body itself (not nested scopes) yields."""
    stack: list[ast.AST] = list(fn.body)
    while stack:
        node = stack.pop()
        if isinstance(node, (ast.Yield, ast.YieldFrom)):
            return True
        if isinstance(node, (ast.FunctionDef, ast.AsyncFunctionDef, ast.Lambda, ast.ClassDef)):
            continue
        stack.extend(ast.iter_child_nodes(node))
    return False
