"""Cross-cutting helpers that belong to no layer."""
