# SPDX-License-Identifier: MIT
"""Allow ``python -m toc_embed_cli``."""

from .main import main

main()
