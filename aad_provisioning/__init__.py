"""Provision Azure Active Directory applications for hosted workloads."""

__version__ = "1.0.0"
