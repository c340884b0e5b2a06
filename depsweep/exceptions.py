"""Custom exceptions for depsweep."""


class DepsweepError(Exception):
    """Base exception for all depsweep errors."""


class ManifestError(DepsweepError):
    """Raised when a package.json manifest cannot be used."""

    def __init__(self, path: str, message: str):
        self.path = path
        super().__init__(f"{message}: {path}")


class ManifestNotFoundError(ManifestError):
    """Raised when no package.json exists at the given location."""

    def __init__(self, path: str):
        super().__init__(path, "Manifest not found")


class ManifestParseError(ManifestError):
    """Raised when a package.json exists but is not a valid JSON object."""

    def __init__(self, path: str, reason: str):
        self.reason = reason
        super().__init__(path, f"Invalid manifest ({reason})")


class SourceParseError(DepsweepError):
    """Raised by a parser when a source file has syntax errors."""

    def __init__(self, file_path: str, line: int, column: int):
        self.file_path = file_path
        self.line = line
        self.column = column
        super().__init__(f"Syntax error in {file_path} at line {line}, column {column}")


class ConfigurationError(DepsweepError):
    """Raised when the run configuration is invalid."""


class ConfigurationParsingError(ConfigurationError):
    """Raised when an rc file cannot be parsed."""

    def __init__(self, path: str, reason: str):
        self.path = path
        super().__init__(f"Failed to parse configuration file {path}: {reason}")


class UnknownPluginError(ConfigurationError):
    """Raised when a parser, detector or special name is not registered."""

    def __init__(self, kind: str, name: str, available: list[str]):
        self.kind = kind
        self.name = name
        super().__init__(
            f"Unknown {kind} '{name}'. Available: {', '.join(sorted(available))}"
        )
