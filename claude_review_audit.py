#!/usr/bin/env python3
"""Entrypoint for running claude_review_auditor from a source checkout."""

import importlib
import sys
from pathlib import Path


def main() -> int:
    project_root = Path(__file__).resolve().parent
    src_path = project_root / "src"
    src_path_str = str(src_path)
    if src_path_str not in sys.path:
        sys.path.insert(0, src_path_str)

    cli_module = importlib.import_module("claude_review_auditor.cli")
    cli_main = getattr(cli_module, "main", None)
    if not callable(cli_main):
        raise RuntimeError("claude_review_auditor cli main() was not found")

    return cli_main()


if __name__ == "__main__":
    sys.exit(main())
