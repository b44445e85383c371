# __init__.py
from skillgap.data.skill_taxonomy import (
	ALIAS_INDEX,
	CATEGORY_TERMS,
	TAXONOMY_VERSION,
	alias_groups_for,
	categories_for,
)

__all__ = [
	"ALIAS_INDEX",
	"CATEGORY_TERMS",
	"TAXONOMY_VERSION",
	"alias_groups_for",
	"categories_for",
]
