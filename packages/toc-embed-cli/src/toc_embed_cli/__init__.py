# SPDX-License-Identifier: MIT
"""Command line interface for toc-embed."""

__version__ = "0.1.0"
