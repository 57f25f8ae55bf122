"""HRM attendance time accounting.

The package is organized by feature modules (shifts, schedules, attendance,
corrections, summary). ``attendance.calculation`` is the pure time-arithmetic
engine; everything else is a thin service layer over repository protocols.
"""
