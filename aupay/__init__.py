"""AU Pay Calc - Australian payslip, tax and superannuation calculator."""

__version__ = "0.3.0"
