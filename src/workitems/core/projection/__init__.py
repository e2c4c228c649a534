"""Tree projection exports."""

from workitems.core.projection.tree import TYPE_ICONS, TreeNode, TreeProjection, build_node

__all__ = ["TYPE_ICONS", "TreeNode", "TreeProjection", "build_node"]
