#!/usr/bin/env python3
"""Launch the myshell interpreter.

Usage:
    python run.py [config.yaml] [--debug] [--trace] [--verbose]
"""
from myshell.main import run

if __name__ == "__main__":
    run()
