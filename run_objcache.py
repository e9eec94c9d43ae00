#!/usr/bin/env python3
"""
objcache - Server Runner

Runs the objcache stdio server as a module so package imports resolve.
"""

import subprocess
import sys
from pathlib import Path


def main() -> None:
    """Run the objcache server."""
    project_root = Path(__file__).parent

    cmd = [sys.executable, "-m", "objcache.server"]

    try:
        subprocess.run(cmd, cwd=project_root)
    except KeyboardInterrupt:
        print("\nServer stopped.")
    except Exception as e:
        print(f"Error running server: {e}")
        sys.exit(1)


if __name__ == "__main__":
    main()
