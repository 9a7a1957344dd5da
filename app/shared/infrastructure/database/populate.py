# 📄 File: app/shared/infrastructure/database/populate.py
#
# 🧭 Purpose (Layman Explanation):
# When the service sends back an item, it swaps the bare "category id" for a short
# summary of the category itself, so clients don't have to ask twice.
#
# 🧪 Purpose (Technical Summary):
# Read-side relationship expansion. Foreign-key ids inside serialized documents are
# replaced by projected fields of the referenced record, one batched query per relation
# per level, recursing into declared nested relations up to ``depth``.
#
# 🔗 Dependencies:
# - sqlalchemy (select with IN)
#
# 🔄 Connected Modules / Calls From:
# - Every module's domain service (get/list/mutation responses)
# - Each module's infrastructure/database/relations.py (relation maps)

import logging
from dataclasses import dataclass, field
from typing import Any, Dict, Iterator, List, Mapping, Sequence, Tuple, Type

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

logger = logging.getLogger(__name__)

Document = Dict[str, Any]


@dataclass(frozen=True)
class Relation:
    """
    A foreign key inside a serialized document.

    ``model`` is the referenced model, ``fields`` the projection kept from its
    ``to_dict()``, and ``nested`` the relations of the projection that expand on
    the next level.
    """

    model: Type[Any]
    fields: Tuple[str, ...]
    nested: Mapping[str, "Relation"] = field(default_factory=dict)


def _slots(doc: Document, path: str) -> Iterator[Tuple[Document, str]]:
    """Yield (container, key) pairs for ``field`` or ``list.field`` paths."""
    if "." not in path:
        if path in doc:
            yield doc, path
        return
    list_key, sub_key = path.split(".", 1)
    for entry in doc.get(list_key) or []:
        if isinstance(entry, dict) and sub_key in entry:
            yield entry, sub_key


async def populate(
    session: AsyncSession,
    documents: Sequence[Document],
    relations: Mapping[str, Relation],
    depth: int = 1,
) -> List[Document]:
    """
    Expand foreign keys in place.

    Args:
        session: Open database session
        documents: Serialized documents (``to_dict()`` output)
        relations: Field path -> Relation
        depth: Levels to expand; 0 leaves ids untouched

    Returns:
        The same documents, expanded
    """
    docs = list(documents)
    if depth <= 0 or not docs:
        return docs

    for path, relation in relations.items():
        slots = [slot for doc in docs for slot in _slots(doc, path)]
        ids = {container[key] for container, key in slots if container[key] is not None}
        if not ids:
            continue

        result = await session.execute(select(relation.model).where(relation.model.id.in_(ids)))
        projected: Dict[Any, Document] = {}
        for record in result.scalars().all():
            full = record.to_dict()
            projected[record.id] = {name: full.get(name) for name in relation.fields}

        if relation.nested and depth > 1:
            await populate(session, list(projected.values()), relation.nested, depth - 1)

        for container, key in slots:
            ref = container[key]
            if ref is None:
                continue
            if ref not in projected:
                logger.warning(f"Dangling reference {path}={ref}")
                container[key] = None
                continue
            container[key] = dict(projected[ref])

    return docs


async def populate_one(
    session: AsyncSession,
    document: Document,
    relations: Mapping[str, Relation],
    depth: int = 1,
) -> Document:
    expanded = await populate(session, [document], relations, depth)
    return expanded[0]
