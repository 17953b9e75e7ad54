"""Custom exceptions for configuration validation."""


class ConfigurationError(Exception):
    """Raised when a configuration cannot be used to run a simulation.

    Startup code raises this instead of letting an invalid run compute
    ``0/0`` sample means or divide by ``num_samples - 1 == 0``.

    Attributes:
        issues: List of specific configuration problems found.

    Examples:
        Catching and inspecting issues::

            try:
                config = build_config(num_trials=0)
            except ConfigurationError as e:
                for issue in e.issues:
                    print(f"  - {issue}")
    """

    def __init__(self, issues: list[str]) -> None:
        self.issues = issues
        bullet_list = "\n".join(f"  - {issue}" for issue in issues)
        super().__init__(
            f"Configuration has {len(issues)} critical "
            f"{'issue' if len(issues) == 1 else 'issues'}:\n{bullet_list}"
        )
