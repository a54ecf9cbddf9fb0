"""Request bodies for the crocodile endpoints.

Names embed the virtual user id and iteration index so that every
iteration creates a distinguishable resource.
"""

from __future__ import annotations


def create_payload(vu: int, iteration: int) -> dict[str, str]:
    return {
        "name": f"Crocodile {vu}-{iteration}",
        "sex": "M",
        "date_of_birth": "2001-01-01",
    }


def update_payload(vu: int, iteration: int) -> dict[str, str]:
    return {
        "name": f"Updated Crocodile {vu}-{iteration}",
        "sex": "F",
        "date_of_birth": "2002-02-02",
    }


def patch_payload(vu: int, iteration: int) -> dict[str, str]:
    return {"name": f"Patched Crocodile {vu}-{iteration}"}
