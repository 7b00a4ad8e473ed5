"""Allow running traefiktop as ``python -m traefiktop``."""

from __future__ import annotations

from .cli import main

if __name__ == "__main__":
    main()
