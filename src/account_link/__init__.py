"""Reconcile SSO identities with local accounts.

Resolves a verified SSO identity to a local account, provisions one when the
access policy allows it, keeps the account's profile and admin rights in step
with the identity, and hands the account to the host session layer.
"""

__version__ = "0.1.0"
