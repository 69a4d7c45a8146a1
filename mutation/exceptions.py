# mutation/exceptions.py
# This file is part of Raten - Robustness-Aware Test Suite Reduction
#
# Exceptions raised by the CRF mutant generator


class UnknownCRFTypeError(ValueError):
    """Raised when a mutation is requested for an unrecognized CRF kind."""

    pass
