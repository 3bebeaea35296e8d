"""Language toolchain adapters (Node.js/npm)."""
