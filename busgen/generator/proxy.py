"""Rust zbus proxy generator for D-Bus interfaces."""

import sys
from collections.abc import Callable, Iterator, Sequence
from dataclasses import dataclass, field
from typing import TypeVar

from jinja2 import Environment, PackageLoader

from busgen import __version__

from .complexity import is_complex
from .formatter import RUSTFMT, FormatterUnavailable, format_code
from .naming import member_identifier, needs_rename, to_identifier
from .rust import to_rust_type
from .signature import SignatureError
from .types import Arg, Interface, Method, Property, Signal

env = Environment(
    loader=PackageLoader("busgen.generator", "templates"),
    trim_blocks=True,
    lstrip_blocks=True,
    keep_trailing_newline=True,
    line_comment_prefix="%%",
    line_statement_prefix="%",
)

proxy_template = env.get_template("proxy.rs.j2")
module_template = env.get_template("module.rs.j2")

TOO_MANY_ARGUMENTS = "#[allow(clippy::too_many_arguments)]"
TYPE_COMPLEXITY = "#[allow(clippy::type_complexity)]"

# counts every argument of the D-Bus method, in and out
MAX_ARGUMENTS = 7


@dataclass
class ProxyFunction:
    """One `fn` declaration inside the generated trait."""

    declaration: str
    attributes: list[str] = field(default_factory=list)


@dataclass
class ProxyMember:
    """A documented interface member and the functions generated for it."""

    name: str
    kind: str
    functions: list[ProxyFunction]


def _complexity_attributes(signatures: Sequence[str]) -> list[str]:
    return [TYPE_COMPLEXITY for signature in signatures if is_complex(signature)]


def _parameter_names(args: Sequence[Arg]) -> Iterator[str]:
    unnamed = 0
    for arg in args:
        if arg.name:
            yield to_identifier(arg.name)
        else:
            unnamed += 1
            yield f"arg_{unnamed}"


def _parameters(args: Sequence[Arg], is_by_reference: bool) -> str:
    params = ["&self"]
    for name, arg in zip(_parameter_names(args), args):
        params.append(f"{name}: {to_rust_type(arg.type, True, is_by_reference)}")
    return ", ".join(params)


def _result(types: Sequence[str]) -> str:
    if not types:
        output = "()"
    elif len(types) == 1:
        output = types[0]
    else:
        output = f"({', '.join(types)})"
    return f"zbus::Result<{output}>"


def method_member(method: Method) -> ProxyMember:
    name = member_identifier(method.name)
    inputs = [arg for arg in method.args if arg.is_input]
    outputs = [to_rust_type(arg.type, False, False) for arg in method.args if not arg.is_input]

    attributes = []
    if needs_rename(method.name, name):
        attributes.append(f'#[zbus(name = "{method.name}")]')
    if len(method.args) >= MAX_ARGUMENTS:
        attributes.append(TOO_MANY_ARGUMENTS)
    attributes.extend(_complexity_attributes([arg.type for arg in method.args]))

    declaration = f"fn {name}({_parameters(inputs, True)}) -> {_result(outputs)}"
    return ProxyMember(method.name, "method", [ProxyFunction(declaration, attributes)])


def signal_member(signal: Signal) -> ProxyMember:
    name = member_identifier(signal.name)
    if needs_rename(signal.name, name):
        attribute = f'#[zbus(signal, name = "{signal.name}")]'
    else:
        attribute = "#[zbus(signal)]"

    declaration = f"fn {name}({_parameters(signal.args, False)}) -> {_result([])}"
    return ProxyMember(signal.name, "signal", [ProxyFunction(declaration, [attribute])])


def property_member(prop: Property) -> ProxyMember:
    name = member_identifier(prop.name)
    if needs_rename(prop.name, name):
        attribute = f'#[zbus(property, name = "{prop.name}")]'
    else:
        attribute = "#[zbus(property)]"

    functions = []
    if prop.readable:
        output = to_rust_type(prop.type, False, False)
        functions.append(
            ProxyFunction(
                f"fn {name}(&self) -> {_result([output])}",
                [attribute, *_complexity_attributes([prop.type])],
            )
        )
    if prop.writable:
        value = to_rust_type(prop.type, True, True)
        functions.append(
            ProxyFunction(f"fn set_{name}(&self, value: {value}) -> {_result([])}", [attribute])
        )
    return ProxyMember(prop.name, "property", functions)


TMember = TypeVar("TMember", Method, Signal, Property)


def _members(items: Sequence[TMember], build: Callable[[TMember], ProxyMember]) -> list[ProxyMember]:
    members = []
    for item in sorted(items, key=lambda m: m.name):
        try:
            members.append(build(item))
        except SignatureError as e:
            raise e.with_member(item.name) from e
    return members


def proxy_attribute(interface: Interface, service: str | None, path: str | None) -> str:
    """Build the `#[proxy(...)]` attribute line for an interface."""
    args = [f'interface = "{interface.name}"']
    if service is not None:
        args.append(f'default_service = "{service}"')
    if path is not None:
        args.append(f'default_path = "{path}"')
    if service is None or path is None:
        args.append("assume_defaults = true")
    return f"#[proxy({', '.join(args)})]"


def _format(code: str, formatter: Sequence[str] | None) -> str:
    if formatter is None:
        return code
    try:
        return format_code(code, formatter)
    except FormatterUnavailable as e:
        print(f"Failed to format generated code: {e}", file=sys.stderr)
        return code


def render(
    interface: Interface,
    service: str | None = None,
    path: str | None = None,
    formatter: Sequence[str] | None = RUSTFMT,
) -> str:
    """Render a zbus proxy trait for an interface.

    Args:
        interface: Interface to generate the proxy for
        service: Default bus name of the proxy, if known
        path: Default object path of the proxy, if known
        formatter: Command to pipe the result through, or None to skip.
                   Formatter failures fall back to the unformatted text.
    """
    members = [
        *_members(interface.methods, method_member),
        *_members(interface.signals, signal_member),
        *_members(interface.properties, property_member),
    ]
    code = proxy_template.render(
        attribute=proxy_attribute(interface, service, path),
        name=interface.short_name,
        members=members,
        BLANK_LINE="",
    )
    return _format(code, formatter)


def render_module(
    interfaces: Sequence[Interface],
    source: str,
    service: str | None = None,
    path: str | None = None,
    formatter: Sequence[str] | None = RUSTFMT,
) -> str:
    """Render a complete Rust module with one proxy per interface."""
    proxies = [render(i, service, path, formatter=None).rstrip("\n") for i in interfaces]
    code = module_template.render(
        interfaces=[f"`{i.name}`" for i in interfaces],
        proxies=proxies,
        source=source,
        version=__version__,
        BLANK_LINE="",
    )
    return _format(code, formatter)
