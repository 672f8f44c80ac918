# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

"""Session-based access control for a small operator dashboard."""

__version__ = "0.1.0"
