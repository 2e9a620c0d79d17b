"""Hospital identity verification for emergency loan applications."""

__version__ = "0.1.0"
