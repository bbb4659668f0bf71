from __future__ import annotations

from ddsync.ui.cli import run

run()
