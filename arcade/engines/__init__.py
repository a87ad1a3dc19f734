"""Pure simulation engines. Each module is a leaf: it depends only on arcade.core types."""
