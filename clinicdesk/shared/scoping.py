"""
Tenant scoping.

Every patient, appointment and medical record carries the id of the doctor
that owns it; medical record files are owned through their parent record.
All feature services go through the helpers here instead of writing their own
``doctor_id`` filters:

- ``get_owned`` looks a single document up by id *and* owner in one query,
  walking up to the parent for transitively owned documents.
- ``scoped_find`` starts every list/count query with the owner predicate.
- ``paginate`` runs a scoped query for one page plus the unpaginated total.

A document that does not exist and a document owned by another doctor are
reported the same way (``NotFoundException``).
"""

from dataclasses import dataclass
from typing import Any, List, Optional, Tuple, Type

from beanie import Document, PydanticObjectId
from beanie.odm.queries.find import FindMany
from bson.errors import InvalidId

from clinicdesk.core.logging import logger
from clinicdesk.shared.exceptions import NotFoundException


@dataclass(frozen=True)
class OwnedResource:
    """
    Describes how a document type is owned.

    Directly owned documents name their owner field. Transitively owned
    documents name their ``parent`` resource and the field holding the parent id.
    """

    model: Type[Document]
    name: str
    owner_field: Optional[str] = "doctor_id"
    parent: Optional["OwnedResource"] = None
    parent_field: Optional[str] = None

    @property
    def not_found(self) -> NotFoundException:
        return NotFoundException(f"{self.name} not found")


def to_object_id(value: Any, resource: OwnedResource) -> PydanticObjectId:
    """Parse a path id; malformed ids are simply not found."""
    try:
        return PydanticObjectId(value)
    except (InvalidId, TypeError, ValueError):
        raise resource.not_found


async def get_owned(resource: OwnedResource, resource_id: Any, doctor_id: str) -> Document:
    """
    Return the document if it exists and belongs to ``doctor_id``.

    Raises:
        NotFoundException: missing document, malformed id, or another doctor's document
    """
    object_id = to_object_id(resource_id, resource)
    model = resource.model

    if resource.parent is None:
        document = await model.find_one(
            {"_id": object_id, resource.owner_field: doctor_id}
        )
        if document is None:
            logger.debug(f"{resource.name} {resource_id} not visible to caller")
            raise resource.not_found
        return document

    document = await model.get(object_id)
    if document is None:
        raise resource.not_found

    try:
        await get_owned(resource.parent, getattr(document, resource.parent_field), doctor_id)
    except NotFoundException:
        logger.debug(f"{resource.name} {resource_id} not visible to caller")
        raise resource.not_found

    return document


async def get_owned_child(
    resource: OwnedResource,
    parent_id: Any,
    child_id: Any,
    doctor_id: str,
) -> Document:
    """
    Resolve a transitively owned child addressed under its parent.

    The child goes through ``get_owned`` (which checks the parent's owner),
    and must also hang off ``parent_id``; a child of another parent is not found.
    """
    parent_object_id = to_object_id(parent_id, resource.parent)
    child = await get_owned(resource, child_id, doctor_id)

    if getattr(child, resource.parent_field) != str(parent_object_id):
        logger.debug(f"{resource.name} {child_id} is not under {resource.parent.name} {parent_id}")
        raise resource.not_found

    return child


def scoped_find(resource: OwnedResource, doctor_id: str, *filters: Any) -> FindMany:
    """Start a query on the caller's documents, then AND any extra filters."""
    return resource.model.find(
        {resource.owner_field: doctor_id},
        *filters,
    )


async def paginate(query: FindMany, page: int = 1, limit: int = 10) -> Tuple[List[Document], int]:
    """
    Fetch one page of a query along with the total number of matches.

    The total comes from the same predicate without skip/limit.
    """
    total = await query.count()
    items = await query.skip((page - 1) * limit).limit(limit).to_list()
    return items, total
