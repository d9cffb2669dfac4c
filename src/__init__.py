"""Tangram puzzle: game core, input translation, rendering and play loop."""
