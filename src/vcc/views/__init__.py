# Copyright 2026 VCC Contributors
# SPDX-License-Identifier: Apache-2.0

"""Debug views of the token stream and the program graph."""

from vcc.views.printer import format_graph, format_tokens

__all__ = [
    "format_graph",
    "format_tokens",
]
