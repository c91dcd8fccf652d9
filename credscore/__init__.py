"""
CredScore Gateway - Behavioral Cashflow Scoring Service

A FastAPI-based microservice that turns self-reported daily revenue and
expenses into an explainable 0-1000 risk score, a risk band and
decision-support narratives for business owners and analysts.
"""

__version__ = "0.1.0"
