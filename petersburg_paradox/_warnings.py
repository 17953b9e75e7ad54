"""Custom warning classes for the St. Petersburg paradox package.

These warning classes allow users to programmatically filter, suppress,
or capture warnings using Python's standard ``warnings`` module.

Example:
    Suppress configuration warnings in a batch run::

        import warnings
        from petersburg_paradox._warnings import ConfigurationWarning

        warnings.filterwarnings("ignore", category=ConfigurationWarning)

    Capture degenerate-sample warnings during aggregation::

        with warnings.catch_warnings(record=True) as w:
            warnings.simplefilter("always", DataQualityWarning)
            stats = calculate_moment_statistics([5.0, 5.0, 5.0])
            degenerate = [x for x in w if issubclass(x.category, DataQualityWarning)]
"""


class PetersburgWarning(UserWarning):
    """Base class for all petersburg-paradox warnings."""


class ConfigurationWarning(PetersburgWarning):
    """Unusual but valid configuration parameters.

    Raised during config validation when parameter values are legal but
    produce a degraded run (e.g., too few samples for decile progress).
    """


class DataQualityWarning(PetersburgWarning):
    """Runtime data-quality observations.

    Raised when aggregation encounters degenerate input such as a sample
    set with zero spread, where skewness and kurtosis are undefined.
    """
