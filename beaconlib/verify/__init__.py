"""Beacon signature verification.

Backend:  beaconlib/verify/backend.py   (capability interface)
py_ecc:   beaconlib/verify/py_ecc_backend.py (BLS12-381 pairings)
Verifier: beaconlib/verify/verifier.py  (scheme resolution + dispatch)
"""

from beaconlib.verify.backend import VerificationBackend
from beaconlib.verify.verifier import Verifier

__all__ = [
    "VerificationBackend",
    "Verifier",
]
