"""Custom exceptions for plasmid editor."""


class ToolkitError(Exception):
    """Base exception for all plasmid editor errors."""
    pass


class ParseError(ToolkitError):
    """Exception raised when a GenBank input cannot be read."""

    def __init__(self, message: str, input_file: str = None):
        self.input_file = input_file

        if input_file is not None:
            message = f"{message} (file: {input_file})"

        super().__init__(message)


class EnzymeCatalogError(ToolkitError):
    """Exception raised while loading or validating enzyme patterns."""

    def __init__(self, message: str, enzyme_name: str = None, source_file: str = None):
        self.enzyme_name = enzyme_name
        self.source_file = source_file

        if enzyme_name is not None:
            message = f"Enzyme {enzyme_name}: {message}"
        if source_file is not None:
            message = f"{message} (file: {source_file})"

        super().__init__(message)


class OutputError(ToolkitError):
    """Exception raised when an encoded record cannot be written."""

    def __init__(self, message: str, output_file: str = None):
        self.output_file = output_file

        if output_file is not None:
            message = f"Failed to write {output_file}: {message}"

        super().__init__(message)


class ConfigurationError(ToolkitError):
    """Exception raised for configuration errors."""

    def __init__(self, message: str, config_file: str = None, parameter: str = None):
        self.config_file = config_file
        self.parameter = parameter

        if config_file is not None:
            message = f"Configuration error in {config_file}: {message}"
        if parameter is not None:
            message = f"{message} (parameter: {parameter})"

        super().__init__(message)
