"""
API client generator - emits typed client modules from Swagger / OpenAPI specs.

Every parameter, response and definition property is resolved through one
TypeResolver per run; inline enums collected on the way are emitted once,
in first-seen order, into the enums module.
"""

from __future__ import annotations

import argparse
import json
import sys
from collections.abc import Mapping
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Final, Sequence

from jinja2 import Environment, FileSystemLoader, Template

from ..shared.errors import OptionsError, SchemaError, SchemaValidationError
from ..shared.naming import (
    quote_property_name,
    safe_identifier,
    slugify,
    to_camel_case,
    to_pascal_case,
)
from ..shared.schema_loader import load_document
from ..type_resolver import EnumRegistry, ResolutionMode, ResolverConfig, TypeResolver
from .options import (
    ClientOptions,
    Formatting,
    apply_format_options,
    format_doc_description,
    load_options,
    options_from_mapping,
)

HTTP_METHODS: Final[tuple[str, ...]] = (
    "get", "put", "post", "delete", "options", "head", "patch"
)
DEFAULT_GROUP: Final[str] = "default"
TEMPLATES_DIR: Final[Path] = Path(__file__).parent / "templates"


@dataclass(frozen=True, slots=True)
class Parameter:
    """One operation parameter; ``schema`` is the raw parameter mapping."""
    name: str
    location: str
    required: bool
    description: str
    schema: Mapping[str, Any]

    @property
    def ident(self) -> str:
        return safe_identifier(to_camel_case(slugify(self.name, fallback=self.name)))


@dataclass(frozen=True, slots=True)
class Operation:
    """Represents an API operation from the spec."""
    id: str
    path: str
    method: str
    group: str
    summary: str
    description: str
    parameters: tuple[Parameter, ...] = ()
    response: Mapping[str, Any] | None = None
    security: tuple[Any, ...] = ()


@dataclass
class GenerationRun:
    """Resolver state for one independent generation run."""
    options: ClientOptions
    registry: EnumRegistry = field(init=False)
    resolver: TypeResolver = field(init=False)
    fmt: Formatting = field(init=False)

    def __post_init__(self) -> None:
        self.registry = EnumRegistry(strict=True)
        self.resolver = TypeResolver(self.registry, ResolverConfig(strict=self.options.strict))
        self.fmt = apply_format_options(self.options)

    def reset(self) -> None:
        self.registry.reset()


@dataclass
class GeneratorContext:
    """Context for code generation with cached templates."""
    template_env: Environment = field(init=False)
    _templates: dict[str, Template] = field(init=False)

    def __post_init__(self) -> None:
        self.template_env = Environment(
            loader=FileSystemLoader(TEMPLATES_DIR),
            autoescape=False,
            trim_blocks=True,
            lstrip_blocks=True,
            keep_trailing_newline=True,
            auto_reload=False,
        )
        self._templates = {
            name: self.template_env.get_template(f"{name}.jinja")
            for name in ("types", "operations", "spec", "enums", "utils")
        }

    def template(self, name: str) -> Template:
        return self._templates[name]


def _resolve_pointer(ref: str, spec: Mapping[str, Any]) -> Any:
    """Follow a local JSON pointer (``#/parameters/limit``) through the spec."""
    if not ref.startswith("#/"):
        return None
    node: Any = spec
    for part in ref[2:].split("/"):
        part = part.replace("~1", "/").replace("~0", "~")
        if not isinstance(node, Mapping) or part not in node:
            return None
        node = node[part]
    return node


def _deref(value: Any, spec: Mapping[str, Any]) -> Any:
    if isinstance(value, Mapping) and isinstance(value.get("$ref"), str):
        target = _resolve_pointer(value["$ref"], spec)
        if isinstance(target, Mapping):
            return target
    return value


def _ensure_unique(base: str, used: dict[str, int]) -> str:
    """Ensure an operation id is unique by appending a suffix if needed."""
    if base not in used:
        used[base] = 1
        return base
    used[base] += 1
    return f"{base}{used[base]}"


def _body_parameter(details: Mapping[str, Any], spec: Mapping[str, Any]) -> Parameter | None:
    body = _deref(details.get("requestBody"), spec)
    if not isinstance(body, Mapping):
        return None
    content = body.get("content") or {}
    schema = None
    for media in content.values():
        if isinstance(media, Mapping) and media.get("schema") is not None:
            schema = media["schema"]
            break
    return Parameter(
        name="body",
        location="body",
        required=bool(body.get("required")),
        description=str(body.get("description") or ""),
        schema={"schema": schema},
    )


def collect_parameters(
    path_item: Mapping[str, Any],
    details: Mapping[str, Any],
    spec: Mapping[str, Any],
) -> tuple[Parameter, ...]:
    """Merge path-level and operation-level parameters, required ones first."""
    merged: dict[tuple[str, str], Mapping[str, Any]] = {}
    for raw in list(path_item.get("parameters") or []) + list(details.get("parameters") or []):
        param = _deref(raw, spec)
        if not isinstance(param, Mapping) or "name" not in param:
            raise SchemaValidationError("parameter without a name", field=str(raw))
        merged[(str(param["name"]), str(param.get("in", "query")))] = param

    params = [
        Parameter(
            name=name,
            location=location,
            required=bool(param.get("required")) or location == "path",
            description=str(param.get("description") or ""),
            schema=param,
        )
        for (name, location), param in merged.items()
    ]
    body = _body_parameter(details, spec)
    if body is not None:
        params.append(body)
    params.sort(key=lambda p: not p.required)
    return tuple(params)


def success_response(details: Mapping[str, Any], spec: Mapping[str, Any]) -> Mapping[str, Any] | None:
    """Return the first 2xx (or default) response carrying a body schema.

    OpenAPI 3 ``content`` responses are normalised to ``{"schema": ...}``.
    """
    responses = details.get("responses") or {}
    if not isinstance(responses, Mapping):
        return None
    # YAML may load status codes as ints
    candidates = sorted((
        (str(code), response) for code, response in responses.items()
        if str(code).startswith("2")
    ), key=lambda item: item[0])
    if "default" in responses:
        candidates.append(("default", responses["default"]))
    for _, raw in candidates:
        response = _deref(raw, spec)
        if not isinstance(response, Mapping):
            continue
        if response.get("schema") is not None:
            return response
        for media in (response.get("content") or {}).values():
            if isinstance(media, Mapping) and media.get("schema") is not None:
                return {"schema": media["schema"]}
    return None


def build_operations(spec: Mapping[str, Any]) -> list[Operation]:
    """Build Operation objects from a spec, sorted by group, path and method."""
    result: list[Operation] = []
    used_ids: dict[str, int] = {}
    global_security = tuple(spec.get("security") or ())

    for path, path_item in (spec.get("paths") or {}).items():
        if not isinstance(path_item, Mapping):
            continue
        for method in HTTP_METHODS:
            details = path_item.get(method)
            if not isinstance(details, Mapping):
                continue

            raw_id = details.get("operationId") or f"{method}_{path}"
            op_id = _ensure_unique(to_camel_case(slugify(str(raw_id))), used_ids)
            tags = details.get("tags") or [DEFAULT_GROUP]
            security = details.get("security")

            result.append(Operation(
                id=op_id,
                path=str(path),
                method=method,
                group=str(tags[0]),
                summary=str(details.get("summary") or "").strip(),
                description=str(details.get("description") or "").strip(),
                parameters=collect_parameters(path_item, details, spec),
                response=success_response(details, spec),
                security=tuple(security) if security is not None else global_security,
            ))

    result.sort(key=lambda op: (op.group, op.path, HTTP_METHODS.index(op.method)))
    return result


def group_operations(operations: Sequence[Operation]) -> dict[str, list[Operation]]:
    """Group operations by their first tag, preserving order."""
    grouped: dict[str, list[Operation]] = {}
    for op in operations:
        grouped.setdefault(op.group, []).append(op)
    return grouped


def group_module_name(group: str) -> str:
    return to_camel_case(slugify(group, fallback=DEFAULT_GROUP))


def definitions(spec: Mapping[str, Any]) -> Mapping[str, Any]:
    """Swagger 2 ``definitions`` or OpenAPI 3 ``components.schemas``."""
    if isinstance(spec.get("definitions"), Mapping):
        return spec["definitions"]
    components = spec.get("components") or {}
    schemas = components.get("schemas") if isinstance(components, Mapping) else None
    return schemas if isinstance(schemas, Mapping) else {}


def stringify(view: Mapping[str, Any], fmt: Formatting) -> str:
    """Render a mapping as a single-quoted object literal."""
    text = json.dumps({k: v for k, v in view.items() if v is not None}, indent=2)
    return text.replace('"', "'").replace("  ", fmt.sp)


def create_log_parameter(type_expr: str) -> str:
    """Build the ``@logParameter`` decorator recording a parameter's type."""
    if type_expr.endswith("[]"):
        return f"@logParameter('{type_expr[:-2]}', true)"
    return f"@logParameter('{type_expr}')"


def _parameter_view(param: Parameter, run: GenerationRun) -> dict[str, Any]:
    ts_type = run.resolver.resolve(param.schema)
    decorators = [create_log_parameter(ts_type)]
    if not param.required:
        decorators.insert(0, "@optional")
    return {
        "name": param.name,
        "key": quote_property_name(param.name),
        "ident": param.ident,
        "in": param.location,
        "required": param.required,
        "description": format_doc_description(param.description, run.fmt),
        "ts_type": ts_type,
        "doc_type": run.resolver.doc_type(param.schema),
        "decorators": " ".join(decorators),
    }


def _operation_view(op: Operation, run: GenerationRun) -> dict[str, Any]:
    params = [_parameter_view(p, run) for p in op.parameters]
    if op.response is None:
        ts_return = doc_return = "void"
    else:
        ts_return = run.resolver.resolve(op.response)
        doc_return = run.resolver.doc_type(op.response)
    descriptor = {
        "path": op.path,
        "method": op.method,
        "parameters": [{"name": p["name"], "in": p["in"], "required": p["required"]} for p in params],
        "security": list(op.security) or None,
    }
    return {
        "id": op.id,
        "summary": format_doc_description(op.summary, run.fmt),
        "description": format_doc_description(op.description, run.fmt),
        "parameters": params,
        "ts_return_type": ts_return,
        "doc_return_type": doc_return,
        "descriptor": stringify(descriptor, run.fmt),
    }


def render_operations_module(
    ctx: GeneratorContext,
    run: GenerationRun,
    group: str,
    operations: Sequence[Operation],
) -> str:
    """Render one operations module for a tag group."""
    module = group_module_name(group)
    return ctx.template("operations").render(
        ts=run.options.is_typescript,
        sp=run.fmt.sp,
        st=run.fmt.st,
        module=module,
        class_name=to_pascal_case(module) + "Api",
        operations=[_operation_view(op, run) for op in operations],
    )


def _definition_view(name: str, schema: Any, run: GenerationRun) -> dict[str, Any]:
    view: dict[str, Any] = {
        "name": name,
        "description": "",
        "properties": [],
        "alias": None,
        "doc_alias": None,
    }
    if not isinstance(schema, Mapping):
        view["alias"] = run.resolver.resolve(schema, ResolutionMode.TYPES_MODULE)
        view["doc_alias"] = run.resolver.doc_type(schema)
        return view

    view["description"] = format_doc_description(schema.get("description"), run.fmt)
    properties = schema.get("properties")
    if not isinstance(properties, Mapping):
        view["alias"] = run.resolver.resolve(schema, ResolutionMode.TYPES_MODULE)
        view["doc_alias"] = run.resolver.doc_type(schema)
        return view

    required = set(schema.get("required") or ())
    for prop_name, prop in properties.items():
        description = prop.get("description") if isinstance(prop, Mapping) else None
        view["properties"].append({
            "name": prop_name,
            "key": quote_property_name(str(prop_name)),
            "required": prop_name in required,
            "description": format_doc_description(description, run.fmt),
            "ts_type": run.resolver.resolve(prop, ResolutionMode.TYPES_MODULE),
            "doc_type": run.resolver.doc_type(prop),
        })
    return view


def render_types_module(ctx: GeneratorContext, run: GenerationRun, spec: Mapping[str, Any]) -> str:
    """Render the types module: one declaration per definition."""
    return ctx.template("types").render(
        ts=run.options.is_typescript,
        sp=run.fmt.sp,
        st=run.fmt.st,
        definitions=[_definition_view(name, schema, run) for name, schema in definitions(spec).items()],
    )


def spec_view(spec: Mapping[str, Any], options: ClientOptions) -> dict[str, Any]:
    components = spec.get("components") or {}
    return {
        "host": options.host or spec.get("host"),
        "schemes": options.schemes or spec.get("schemes"),
        "basePath": spec.get("basePath"),
        "contentTypes": spec.get("consumes") or [],
        "accepts": spec.get("produces") or [],
        "securityDefinitions": (
            options.security_definitions
            or spec.get("securityDefinitions")
            or (components.get("securitySchemes") if isinstance(components, Mapping) else None)
        ),
        "timeout": options.timeout,
    }


def render_spec_module(ctx: GeneratorContext, run: GenerationRun, spec: Mapping[str, Any]) -> str:
    """Render ``gateway/spec``: the runtime configuration object."""
    return ctx.template("spec").render(
        ts=run.options.is_typescript,
        st=run.fmt.st,
        view=stringify(spec_view(spec, run.options), run.fmt),
        get_authorization=run.options.get_authorization,
        apply_authorization=run.options.apply_authorization,
    )


def render_enums_module(ctx: GeneratorContext, run: GenerationRun) -> str:
    """Render every collected enum declaration exactly once."""
    return ctx.template("enums").render(
        sp=run.fmt.sp,
        st=run.fmt.st,
        declarations=run.resolver.enum_declarations(),
    )


def render_utils_module(ctx: GeneratorContext, run: GenerationRun) -> str:
    return ctx.template("utils").render(sp=run.fmt.sp)


def generate(
    spec: Mapping[str, Any],
    options: ClientOptions,
    *,
    ctx: GeneratorContext | None = None,
    run: GenerationRun | None = None,
) -> dict[str, str]:
    """Generate every client module.

    Returns a mapping of path (relative to ``options.out_dir``) to contents.
    The run's registry is reset first so repeated calls are independent.
    """
    if not isinstance(spec.get("paths"), Mapping):
        raise SchemaValidationError("document has no 'paths' mapping", field="paths")

    ctx = ctx or GeneratorContext()
    run = run or GenerationRun(options)
    run.reset()
    lang = options.language

    files: dict[str, str] = {}
    files[f"gateway/spec.{lang}"] = render_spec_module(ctx, run, spec)
    for group, ops in group_operations(build_operations(spec)).items():
        files[f"{group_module_name(group)}.{lang}"] = render_operations_module(ctx, run, group, ops)
    files[f"types.{lang}"] = render_types_module(ctx, run, spec)
    if options.is_typescript:
        files["enums.ts"] = render_enums_module(ctx, run)
        files["utils.ts"] = render_utils_module(ctx, run)
    return files


def write_outputs(files: Mapping[str, str], out_dir: Path) -> list[Path]:
    written: list[Path] = []
    for relative, contents in files.items():
        target = out_dir / relative
        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_text(contents, encoding="utf-8")
        written.append(target)
    return written


def main(argv: Sequence[str] | None = None) -> None:
    parser = argparse.ArgumentParser(description=__doc__)
    parser.add_argument("src", nargs="?", help="Path or URL of the API document (JSON or YAML)")
    parser.add_argument("--config", type=Path, help="YAML/JSON file with generator options")
    parser.add_argument("--out-dir", type=Path, help="Output directory for the generated client")
    parser.add_argument("--language", choices=["ts", "js"], help="Target language")
    parser.add_argument("--indent", help="Indentation: 2, 4, tab or spaces")
    parser.add_argument("--semicolon", action="store_true", default=None, help="Terminate statements with ';'")
    parser.add_argument("--host", help="Override the API host")
    parser.add_argument("--timeout", type=int, help="Request timeout in milliseconds")
    parser.add_argument("--strict", action="store_true", default=None, help="Fail on untyped array items")
    args = parser.parse_args(argv)

    overrides = {
        "src": args.src,
        "out_dir": args.out_dir,
        "language": args.language,
        "indent": args.indent,
        "semicolon": args.semicolon,
        "host": args.host,
        "timeout": args.timeout,
        "strict": args.strict,
    }
    try:
        options = load_options(args.config, **overrides) if args.config else options_from_mapping({}, **overrides)
        if not options.src:
            raise SystemExit("No API document given (pass SRC or set 'src' in --config)")
        spec = load_document(options.src)
        files = generate(spec, options)
    except (SchemaError, OptionsError) as e:
        print(f"error: {e}", file=sys.stderr)
        raise SystemExit(1) from e

    for path in write_outputs(files, options.out_dir):
        print(f"Generated {path}")


if __name__ == "__main__":
    main()
