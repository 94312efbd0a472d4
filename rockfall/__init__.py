"""
Rockfall Package
================

Falling-rock stacking engine for a narrow 7-wide chamber, with cycle
detection so stack heights can be computed for astronomically many drops.

- rock_core: catalog, jets, chamber, simulation, cycle detection, extrapolation
- evaluation: command-line runner for puzzle input files

Tunable parameters are in chamber_config.yaml.
"""
