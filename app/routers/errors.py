"""Translation of service exceptions into HTTP errors."""

from collections.abc import Iterator
from contextlib import contextmanager

from fastapi import HTTPException

from app.core.errors import CardNotFoundError, PartialSaveError, StoreError, ValidationError


@contextmanager
def service_errors() -> Iterator[None]:
    """Map service exceptions raised inside the block to ``HTTPException``.

    Store failures only expose their generic ``user_message``.
    """
    try:
        yield
    except CardNotFoundError:
        raise HTTPException(status_code=404, detail="Card not found")
    except ValidationError as exc:
        raise HTTPException(status_code=422, detail=str(exc))
    except PartialSaveError as exc:
        raise HTTPException(
            status_code=502,
            detail=exc.user_message,
            headers={"X-Saved-Card-Id": str(exc.card_id)},
        )
    except StoreError as exc:
        raise HTTPException(status_code=502, detail=exc.user_message)
