"""JSON-file backed parfum catalog."""

import json
import logging
import os
import shutil
import tempfile
from collections import Counter
from pathlib import Path
from typing import Any, Optional, Union

from pydantic import ValidationError as SchemaValidationError

from errors import NotFoundError, PersistenceError, ValidationError
from schemas.parfum import CatalogDocument, CatalogStats, Gender, Parfum, ParfumFields

logger = logging.getLogger(__name__)


class CatalogStore:
    """
    Durable, queryable collection of parfum records backed by one JSON file.

    Every operation re-reads the file, and every mutation writes the whole
    document back. Nothing is cached between calls, so two processes writing
    the same file concurrently can lose an update (last save wins).
    """

    def __init__(self, path: Union[str, Path] = "data/parfums.json"):
        """
        Initialize catalog store.

        Args:
            path: Path to the catalog JSON file
        """
        self.path = Path(path)

    def load(self) -> CatalogDocument:
        """
        Read and parse the catalog file.

        Returns:
            Parsed catalog document

        Raises:
            PersistenceError: If the file is unreadable or malformed
        """
        try:
            with open(self.path, "r", encoding="utf-8") as f:
                raw = json.load(f)
        except (OSError, ValueError) as e:
            logger.error(f"Failed to load catalog from {self.path}: {e}")
            raise PersistenceError(f"Error loading parfum data: {e}", path=str(self.path)) from e

        try:
            doc = CatalogDocument.model_validate(raw)
        except SchemaValidationError as e:
            logger.error(f"Catalog at {self.path} is not a valid document: {e}")
            raise PersistenceError(f"Error loading parfum data: {e}", path=str(self.path)) from e

        duplicates = [pid for pid, n in Counter(p.id for p in doc.parfums).items() if n > 1]
        if duplicates:
            raise PersistenceError(
                f"Error loading parfum data: duplicate ids {', '.join(duplicates)}",
                path=str(self.path),
            )

        return doc

    def save(self, doc: CatalogDocument) -> None:
        """
        Write the full document, replacing the file in one step.

        The document is written to a temporary file next to the target and
        then renamed over it, so readers see either the old or the new
        document, never a partial one.

        Raises:
            PersistenceError: If the file cannot be written
        """
        payload = doc.to_json_dict()
        tmp_name: Optional[str] = None
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            fd, tmp_name = tempfile.mkstemp(
                dir=self.path.parent, prefix=f".{self.path.name}.", suffix=".tmp"
            )
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                json.dump(payload, f, indent=2, ensure_ascii=False)
                f.flush()
                os.fsync(f.fileno())
            if self.path.exists():
                shutil.copymode(self.path, tmp_name)
            os.replace(tmp_name, self.path)
            tmp_name = None
        except (OSError, TypeError, ValueError) as e:
            logger.error(f"Failed to save catalog to {self.path}: {e}")
            raise PersistenceError(f"Error saving parfum data: {e}", path=str(self.path)) from e
        finally:
            if tmp_name is not None and os.path.exists(tmp_name):
                os.unlink(tmp_name)

    # Queries

    def list_all(self) -> list[Parfum]:
        """Get every record in file order."""
        return self.load().parfums

    def search(self, query: str) -> list[Parfum]:
        """
        Case-insensitive substring search over name, brand, category and description.

        Args:
            query: Text to look for

        Returns:
            Matching records in file order (empty if none match)
        """
        needle = query.lower()
        return [
            p for p in self.load().parfums
            if needle in p.name.lower()
            or needle in p.brand.lower()
            or needle in p.category.lower()
            or needle in p.description.lower()
        ]

    def get_by_id(self, parfum_id: str) -> Optional[Parfum]:
        """Get a record by exact id, or None."""
        for parfum in self.load().parfums:
            if parfum.id == parfum_id:
                return parfum
        return None

    def get_by_name(self, name: str) -> Optional[Parfum]:
        """Get a record by exact name, or None."""
        return find_by_name(self.load(), name)

    def get_by_brand(self, brand: str) -> list[Parfum]:
        """Get records whose brand equals `brand`, ignoring case."""
        brand_lower = brand.lower()
        return [p for p in self.load().parfums if p.brand.lower() == brand_lower]

    def get_by_category(self, category: str) -> list[Parfum]:
        """Get records whose category contains `category`, ignoring case."""
        category_lower = category.lower()
        return [p for p in self.load().parfums if category_lower in p.category.lower()]

    def get_by_gender(self, gender: Union[str, Gender]) -> list[Parfum]:
        """
        Get records for a gender, ignoring case.

        Unisex records match every gender filter.
        """
        gender_lower = (gender.value if isinstance(gender, Gender) else gender).lower()
        unisex = Gender.UNISEX.value.lower()
        return [
            p for p in self.load().parfums
            if p.gender.value.lower() in (gender_lower, unisex)
        ]

    def get_all_brands(self) -> list[str]:
        """Get the informational brand list."""
        return self.load().brands

    def get_all_categories(self) -> list[str]:
        """Get the informational category list."""
        return self.load().categories

    def stats(self) -> CatalogStats:
        """Summarize record counts by brand, category, gender and price range."""
        parfums = self.load().parfums
        return CatalogStats(
            total_parfums=len(parfums),
            total_brands=len({p.brand for p in parfums}),
            total_categories=len({p.category for p in parfums}),
            gender_distribution=dict(Counter(p.gender.value for p in parfums)),
            price_distribution=dict(Counter(p.price_range.value for p in parfums)),
        )

    # Mutations

    def add(self, fields: Union[ParfumFields, dict[str, Any]]) -> Parfum:
        """
        Add a record with the next free id.

        The new id is one more than the largest numeric id in the catalog,
        or "1" if the catalog is empty. Any id in `fields` is ignored.

        Args:
            fields: Record contents without an id

        Returns:
            The stored record

        Raises:
            ValidationError: If `fields` is not a complete record
        """
        doc = self.load()

        data = fields.model_dump(mode="json") if isinstance(fields, ParfumFields) else dict(fields)
        data.pop("id", None)
        new_id = next_id(doc)

        try:
            parfum = Parfum.model_validate({"id": new_id, **data})
        except SchemaValidationError as e:
            raise ValidationError(f"Invalid parfum data: {e}", identifier=new_id) from e

        doc.parfums.append(parfum)
        self.save(doc)
        logger.info(f"Added parfum {parfum.id}: {parfum.name} ({parfum.brand})")
        return parfum

    def update(self, parfum_id: str, changes: dict[str, Any]) -> Parfum:
        """
        Merge `changes` onto an existing record.

        Top-level keys missing from `changes` keep their current values.

        Args:
            parfum_id: Id of the record to update
            changes: Fields to overwrite

        Returns:
            The merged record

        Raises:
            NotFoundError: If no record has `parfum_id`
            ValidationError: If the merge would change the id or yields an invalid record
        """
        doc = self.load()
        index = _index_of(doc, parfum_id)

        if "id" in changes and str(changes["id"]) != parfum_id:
            raise ValidationError(
                f"Cannot change id of parfum {parfum_id}", identifier=parfum_id
            )

        merged = {**doc.parfums[index].to_record(), **changes, "id": parfum_id}
        try:
            parfum = Parfum.model_validate(merged)
        except SchemaValidationError as e:
            raise ValidationError(f"Invalid update for parfum {parfum_id}: {e}", identifier=parfum_id) from e

        doc.parfums[index] = parfum
        self.save(doc)
        logger.info(f"Updated parfum {parfum_id}: {', '.join(changes) or 'no fields'}")
        return parfum

    def delete(self, parfum_id: str) -> Parfum:
        """
        Remove a record.

        Returns:
            The removed record

        Raises:
            NotFoundError: If no record has `parfum_id`
        """
        doc = self.load()
        index = _index_of(doc, parfum_id)

        removed = doc.parfums.pop(index)
        self.save(doc)
        logger.info(f"Deleted parfum {parfum_id}: {removed.name}")
        return removed


def next_id(doc: CatalogDocument) -> str:
    """Next id for `doc`: max numeric id + 1, or "1" for an empty catalog."""
    numeric_ids = [int(p.id) for p in doc.parfums if p.id.isdigit()]
    return str(max(numeric_ids) + 1) if numeric_ids else "1"


def find_by_name(doc: CatalogDocument, name: str) -> Optional[Parfum]:
    """First record in `doc` whose name is exactly `name`."""
    for parfum in doc.parfums:
        if parfum.name == name:
            return parfum
    return None


def _index_of(doc: CatalogDocument, parfum_id: str) -> int:
    for i, parfum in enumerate(doc.parfums):
        if parfum.id == parfum_id:
            return i
    raise NotFoundError(f"Parfum with ID {parfum_id} not found", identifier=parfum_id)
