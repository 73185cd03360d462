"""Host adapters that drive the engine from a concrete UI toolkit."""
