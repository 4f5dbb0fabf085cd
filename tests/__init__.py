"""
garchlik test suite.

Tests for the EGARCH(1,1) and DCC likelihood kernels, the panel helpers that
connect them, and the shared core (configuration, exceptions, validation).
"""
