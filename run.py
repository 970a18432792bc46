#!/usr/bin/env python3
"""
Six-seat Texas Hold'em - Console Startup Script

Usage:
    python run.py [--min-bet N] [--chips N] [--seed N] [--bots-only] [--hands N]
"""

from holdem.cli import main


if __name__ == "__main__":
    raise SystemExit(main())
