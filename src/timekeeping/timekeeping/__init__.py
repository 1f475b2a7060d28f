"""Timekeeping package.

Attendance metrics and adherence engine. Feature modules (events, periods,
metrics, shifts, adherence) hold pure computations over punch events; the
service layer talks to external collaborators through repository protocols.
"""
