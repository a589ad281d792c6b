"""Service layer: one module per entity, plus numbering, dashboard and Cashfree."""
