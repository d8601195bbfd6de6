#!/usr/bin/env python3
"""
run.py - Main entry point for the fourway connect-four engine

Examples:

    # Two players, classic 7x6 board
    python run.py play

    # Three players on a wider board
    python run.py play --players red,gold,#00f --width 9 --height 7

    # Time the engine on 5000 random games
    python run.py benchmark --iterations 5000 --seed 1
"""

import os
import sys

# Add the project root to Python path to ensure imports work
sys.path.insert(0, os.path.dirname(os.path.abspath(__file__)))

from fourway.interfaces.cli import main

if __name__ == "__main__":
    sys.exit(main())
