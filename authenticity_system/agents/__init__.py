"""Product authenticity agents."""

from authenticity_system.agents.verification import VerificationAgent, verify_product

__all__ = ["VerificationAgent", "verify_product"]
