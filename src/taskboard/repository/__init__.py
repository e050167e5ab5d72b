"""
Repositories: Data Access Layer

``RepositoryBase`` maps any ``@entity`` type onto the generic stored
procedures (get/insert/update/delete/paging by table name). Feature packages
subclass it per table and add nothing but the entity binding.

Repositories contain no business logic. Services decide what should happen;
repositories answer "how do I get or store this row?".
"""

from taskboard.repository.base import Conditions, RepositoryBase

__all__ = ["Conditions", "RepositoryBase"]
