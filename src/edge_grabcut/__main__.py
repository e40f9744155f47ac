from __future__ import annotations

from edge_grabcut.main import cli

if __name__ == "__main__":
    cli()
