"""
Mortgage affordability agent.

This package drives the TD mortgage affordability calculator: it resolves
natural-language UI instructions into cached Playwright actions, walks the
calculator's form steps, and extracts the computed results.
"""
