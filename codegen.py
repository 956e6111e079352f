#!/usr/bin/env python3
"""
Convenience wrapper for the client generator.

Forwards to the client_codegen module. Run with --help to see available
commands.

Usage:
    python codegen.py <command> [options]
    ./codegen.py <command> [options]  (on Unix with execute permission)

Commands:
    generate    Generate client modules from an API document
    resolve     Resolve one inline schema and print its type expression
    clean       Remove generated client modules

Examples:
    python codegen.py generate petstore.yaml --out-dir src/api
    python codegen.py resolve '{"type": "string", "enum": ["RED", "GREEN"]}'
"""

import os
import subprocess
import sys
from pathlib import Path

ROOT = Path(__file__).resolve().parent


def main() -> int:
    """Forward all arguments to the client_codegen module."""
    return subprocess.call(
        [sys.executable, "-m", "client_codegen"] + sys.argv[1:],
        env={**os.environ, "PYTHONPATH": os.pathsep.join(filter(None, [str(ROOT), os.environ.get("PYTHONPATH")]))},
    )


if __name__ == "__main__":
    sys.exit(main())
