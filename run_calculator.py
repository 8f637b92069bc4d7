"""
Entry point: opens the mortgage affordability calculator, fills the form
with the configured inputs, and logs the extracted results.

The implementation is split into modular components under mortgage_agent/.
"""

from __future__ import annotations
from mortgage_agent.core.orchestrator import print_summary, run


def main():
    final_state = run()
    print_summary(final_state)
    print("\nDone. Cached actions are reused on the next run; delete cache.json to re-resolve them.\n")


if __name__ == "__main__":
    main()
