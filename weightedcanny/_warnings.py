"""Warning utilities shared across weightedcanny modules."""

from __future__ import annotations

import warnings


class WeightedCannyWarning(UserWarning):
    """Warning for detector runs that cannot produce meaningful output.

    We define our own category so that these warnings can be filtered
    independently of other ``UserWarning`` sources.

    """


def warn(msg: str, category: type[Warning] = WeightedCannyWarning, stacklevel: int = 2) -> None:
    """Generate a warning with stacktrace.

    Parameters
    ----------
    msg : str
        The message of the warning.

    category : class
        The class of the warning to produce.

    stacklevel : int, optional
        How many steps above this function to "jump" in the stacktrace when
        displaying file and line number of the error message.
        Usually ``2``.

    """
    warnings.warn(msg, category=category, stacklevel=stacklevel)
