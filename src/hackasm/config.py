"""
hackasm Configuration
=====================

Assembler settings. Configuration can come from:
- Default values (defined here)
- Environment variables
- Command-line flags (applied on top by the CLI)

Environment variables (all optional):
    HACKASM_STRICT_LABELS: Treat duplicate labels as errors (1/true/yes/on)
    HACKASM_MAX_ERRORS: Malformed lines tolerated before giving up (integer)
    HACKASM_OUTPUT_SUFFIX: Default output file suffix (e.g. ".hack")
"""

from dataclasses import dataclass
import os


_TRUE_VALUES = frozenset({"1", "true", "yes", "on"})


@dataclass
class AssemblerConfig:
    """
    Configuration for an assembly run.

    Attributes:
        strict_labels: If True, a second declaration of a label raises
                       DuplicateSymbolError. If False (default), the first
                       declaration wins and a warning is recorded.
        max_errors: Number of malformed lines collected before the run is
                    aborted with TooManyErrors (default: 100)
        output_suffix: Suffix for the default output file (default: ".hack")
    """

    strict_labels: bool = False
    max_errors: int = 100
    output_suffix: str = ".hack"

    @classmethod
    def from_env(cls) -> "AssemblerConfig":
        """
        Create AssemblerConfig from environment variables.

        Returns:
            AssemblerConfig with values from environment variables
        """
        config = cls()

        if strict := os.environ.get("HACKASM_STRICT_LABELS"):
            config.strict_labels = strict.strip().lower() in _TRUE_VALUES

        if max_errors := os.environ.get("HACKASM_MAX_ERRORS"):
            try:
                value = int(max_errors)
            except ValueError:
                pass  # Ignore invalid values
            else:
                if value > 0:
                    config.max_errors = value

        if suffix := os.environ.get("HACKASM_OUTPUT_SUFFIX"):
            config.output_suffix = suffix if suffix.startswith(".") else f".{suffix}"

        return config
