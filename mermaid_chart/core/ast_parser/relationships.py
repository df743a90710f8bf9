"""Relationship derivation from already-extracted entities.

Only declared supertypes produce edges. Property types are not inspected,
so composition, aggregation and association edges are never inferred here.
"""

from typing import List, Sequence

from .models import Entity, Relationship, RelationshipType

IMPLEMENTS_LABEL = "implements"


def derive_relationships(entities: Sequence[Entity]) -> List[Relationship]:
    """Build inheritance and implementation edges.

    Order follows the entities; within an entity every ``extends`` edge
    precedes every ``implements`` edge. Duplicates are kept.

    Args:
        entities: Extracted entities, read-only

    Returns:
        New Relationship values
    """
    relationships: List[Relationship] = []

    for entity in entities:
        for parent in entity.extends:
            relationships.append(
                Relationship(type=RelationshipType.INHERITANCE, source=entity.name, target=parent)
            )
        for interface in entity.implements:
            relationships.append(
                Relationship(
                    type=RelationshipType.DEPENDENCY,
                    source=entity.name,
                    target=interface,
                    label=IMPLEMENTS_LABEL,
                )
            )

    return relationships
