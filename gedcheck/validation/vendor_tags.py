"""Custom tag definitions for the major genealogy vendors.

Every function builds a new registry, so callers may extend the result freely.
"""

from ..core.document import Vendor
from .tag_registry import TagDefinition, TagRegistry, YES_NO_PATTERN, definitions, merge_registries


def ancestry_registry() -> TagRegistry:
    """Tags written by Ancestry.com and Family Tree Maker."""
    registry = TagRegistry()
    registry.register_batch(definitions([
        TagDefinition('_APID', {'SOUR'},
                      description="Ancestry permanent ID linking to a database record"),
        TagDefinition('_TREE', {'HEAD'}, description="Ancestry tree reference identifier"),
        TagDefinition('_MILT', {'INDI'}, description="Military service record"),
        TagDefinition('_DEST', {'EMIG', 'IMMI'},
                      description="Destination of an emigration or immigration"),
        TagDefinition('_PRIM', {'OBJE'}, YES_NO_PATTERN, "Primary photo flag (Y/N)"),
        TagDefinition('_PHOTO', {'INDI'}, description="Photo indicator for an individual"),
    ]))
    return registry


def familysearch_registry() -> TagRegistry:
    """Tags written by FamilySearch."""
    registry = TagRegistry()
    registry.register_batch(definitions([
        TagDefinition('_FSFTID', {'INDI'}, description="FamilySearch Family Tree ID"),
        TagDefinition('_FSORD', {'INDI'}, description="FamilySearch ordinance information"),
        TagDefinition('_FSTAG', description="FamilySearch general-purpose tag"),
    ]))
    return registry


def rootsmagic_registry() -> TagRegistry:
    """Tags written by RootsMagic."""
    registry = TagRegistry()
    registry.register_batch(definitions([
        TagDefinition('_PRIM', value_pattern=YES_NO_PATTERN, description="Primary indicator (Y/N)"),
        TagDefinition('_SDATE', description="Sort date for ordering events"),
        TagDefinition('_TMPLT', {'SOUR'}, description="Source template reference"),
    ]))
    return registry


def default_vendor_registry() -> TagRegistry:
    """Ancestry, FamilySearch and RootsMagic tags merged in that order."""
    return merge_registries(ancestry_registry(), familysearch_registry(), rootsmagic_registry())


_VENDOR_REGISTRIES = {
    Vendor.ANCESTRY: ancestry_registry,
    Vendor.FAMILYSEARCH: familysearch_registry,
    Vendor.ROOTSMAGIC: rootsmagic_registry,
}


def registry_for_vendor(vendor: Vendor) -> TagRegistry:
    """Registry for one vendor; an empty registry when the vendor has no table."""
    factory = _VENDOR_REGISTRIES.get(vendor)
    if factory is None:
        return TagRegistry()
    return factory()
