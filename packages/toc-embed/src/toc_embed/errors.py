# SPDX-License-Identifier: MIT
"""Base exception for the embedding engine."""


class EmbedError(Exception):
    """Base class for all errors raised while embedding libraries."""

    pass
