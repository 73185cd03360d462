"""Runtime services shared by every layer of the engine."""
