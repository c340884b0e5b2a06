"""Package-name helpers: root-name normalization, @types names, builtins."""

from __future__ import annotations

# Node.js core modules. Sub-path builtins ("fs/promises", "stream/web")
# normalize to one of these roots.
BUILTIN_MODULES: frozenset[str] = frozenset(
    {
        "assert",
        "async_hooks",
        "buffer",
        "child_process",
        "cluster",
        "console",
        "constants",
        "crypto",
        "dgram",
        "diagnostics_channel",
        "dns",
        "domain",
        "events",
        "fs",
        "http",
        "http2",
        "https",
        "inspector",
        "module",
        "net",
        "os",
        "path",
        "perf_hooks",
        "process",
        "punycode",
        "querystring",
        "readline",
        "repl",
        "stream",
        "string_decoder",
        "sys",
        "timers",
        "tls",
        "trace_events",
        "tty",
        "url",
        "util",
        "v8",
        "vm",
        "wasi",
        "worker_threads",
        "zlib",
    }
)

_NODE_SCHEME = "node:"


def to_package_root_name(reference: str) -> str:
    """Reduce a module specifier to its installable package name.

    ``lodash/fp`` -> ``lodash``, ``@babel/core/lib/x`` -> ``@babel/core``.
    Relative specifiers collapse to ``.`` or ``..`` and absolute paths to
    the empty string; callers filter those out.
    """
    parts = reference.split("/")
    if reference.startswith("@"):
        return "/".join(parts[:2])
    return parts[0]


def at_types_name(dependency: str) -> str:
    """Return the DefinitelyTyped package that carries types for *dependency*."""
    if dependency.startswith("@"):
        dependency = dependency[1:].replace("/", "__", 1)
    return f"@types/{dependency}"


def is_builtin(name: str) -> bool:
    return name.startswith(_NODE_SCHEME) or name in BUILTIN_MODULES
