# Copyright (c) 2026 Veritas Aequitas Holdings LLC. All rights reserved.
"""twistcli invocation and the end-to-end scan pipeline."""
