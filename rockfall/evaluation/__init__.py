"""
Evaluation - Command-line runner for puzzle inputs.

Usage:
    python -m rockfall.evaluation.run_puzzle path/to/input.txt
"""
