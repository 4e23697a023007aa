"""
Idempotent persistence of normalized locations.

Every entity is matched on its natural key instead of its surrogate id, so
running the same scrape twice updates rows in place:

- RetailChain: name
- City: name (extracted from the address)
- Location: (retail_chain_id, city_id, address)
- WorkHour: (location_id, date, locale), once per locale

A batch is synchronized inside a single transaction. Large batches are split
into chunks that commit independently; a failing chunk is rolled back and
logged without affecting the chunks around it.
"""
import logging
from collections.abc import Iterable, Sequence
from typing import Any, Optional

from sqlalchemy import inspect as sa_inspect
from sqlalchemy.orm import Session, sessionmaker

from storehours.models import RetailChain, City, Location, WorkHour, NATIVE_LOCALE, ENGLISH_LOCALE
from storehours.services.day_names import translate_to_en
from storehours.services.schedule_normalizer import LocationWithWorkHours, WorkHourEntry
from storehours.utils.text import extract_city

logger = logging.getLogger(__name__)

DEFAULT_BATCH_SIZE = 100

LOCATION_MUTABLE_FIELDS = ("name", "phone_number", "description", "open_this_sunday")
WORK_HOUR_MUTABLE_FIELDS = ("name", "from_hour", "to_hour")


def resolve_or_create(
    db: Session,
    model,
    key: dict[str, Any],
    values: Optional[dict[str, Any]] = None,
    mutable: Iterable[str] = (),
):
    """
    Find a row by its natural key or insert it.

    Args:
        db: Session inside an open transaction
        model: Mapped class to look up
        key: Attribute -> value pairs identifying the row. Attributes may be
             hybrid properties (e.g. WorkHour.locale).
        values: Column values for a new row; also the source for `mutable`
        mutable: Fields overwritten on an existing row

    Returns:
        The existing or newly inserted instance (flushed, so it has an id)
    """
    values = values or {}
    criteria = [getattr(model, field) == value for field, value in key.items()]
    instance = db.query(model).filter(*criteria).first()

    if instance is None:
        columns = set(sa_inspect(model).columns.keys())
        row = {field: value for field, value in key.items() if field in columns}
        row.update(values)
        instance = model(**row)
        db.add(instance)
        db.flush()
        return instance

    for field in mutable:
        if field in values:
            setattr(instance, field, values[field])
    return instance


def _localized_names(entry: WorkHourEntry) -> list[dict[str, str]]:
    """The day name in the native locale and its English translation."""
    return [
        {"locale": NATIVE_LOCALE, "value": entry.day},
        {"locale": ENGLISH_LOCALE, "value": entry.day_en or translate_to_en(entry.day)},
    ]


def save_work_hours(db: Session, location_id: int, entries: Iterable[WorkHourEntry]) -> int:
    """Upsert every entry once per locale. Returns the number of rows written."""
    written = 0
    for entry in entries:
        for name in _localized_names(entry):
            resolve_or_create(
                db,
                WorkHour,
                key={"location_id": location_id, "date": entry.date, "locale": name["locale"]},
                values={"name": name, "from_hour": entry.from_hour, "to_hour": entry.to_hour},
                mutable=WORK_HOUR_MUTABLE_FIELDS,
            )
            written += 1
    return written


def save_location(db: Session, retail_chain_id: int, location: LocationWithWorkHours) -> Location:
    city = resolve_or_create(db, City, key={"name": extract_city(location.address)})

    row = resolve_or_create(
        db,
        Location,
        key={"retail_chain_id": retail_chain_id, "city_id": city.id, "address": location.address},
        values={
            "name": location.name,
            "phone_number": location.phone_number,
            "description": location.description,
            "open_this_sunday": location.open_this_sunday,
        },
        mutable=LOCATION_MUTABLE_FIELDS,
    )
    db.flush()

    save_work_hours(db, row.id, location.work_hours)
    return row


def save_locations(
    session_factory: sessionmaker,
    locations: Sequence[LocationWithWorkHours],
    retail_name: str,
) -> int:
    """
    Synchronize one batch of locations in a single transaction.

    Returns:
        Number of locations saved

    Raises:
        SQLAlchemyError: The transaction was rolled back
    """
    with session_factory() as db:
        with db.begin():
            chain = resolve_or_create(db, RetailChain, key={"name": retail_name})
            for location in locations:
                save_location(db, chain.id, location)

    logger.debug(f"Committed {len(locations)} {retail_name} locations")
    return len(locations)


def save_locations_in_batches(
    session_factory: sessionmaker,
    locations: Sequence[LocationWithWorkHours],
    retail_name: str,
    batch_size: int = DEFAULT_BATCH_SIZE,
) -> dict:
    """
    Synchronize locations in independent chunks of `batch_size`.

    Chunks run one after another. A chunk that raises, whether from the
    database or from the driver rejecting a value, is rolled back and logged;
    the remaining chunks still run.
    """
    saved = 0
    failed_batches = 0

    for start in range(0, len(locations), batch_size):
        batch = locations[start:start + batch_size]
        try:
            saved += save_locations(session_factory, batch, retail_name)
        except Exception as e:
            failed_batches += 1
            logger.error(
                f"Error saving {retail_name} locations {start}-{start + len(batch) - 1}: {e}",
                exc_info=True,
            )

    if failed_batches and not saved:
        status = "error"
    elif failed_batches:
        status = "partial"
    else:
        status = "success"

    logger.info(f"Saved {saved}/{len(locations)} {retail_name} locations ({status})")
    return {
        "retailer": retail_name,
        "locations": len(locations),
        "saved": saved,
        "failed_batches": failed_batches,
        "status": status,
    }
