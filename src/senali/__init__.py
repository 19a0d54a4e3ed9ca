"""
Senali - AI parenting support backend

Backend services for the Senali app: conversational support for
parents of neurodivergent children, daily tips, family profiles,
screening checklists and credit-based billing.
"""

__version__ = "0.1.0"
__author__ = "Senali Engineering Team"
