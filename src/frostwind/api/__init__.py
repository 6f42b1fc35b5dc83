"""HTTP surface for driving a Frostwind game from a presentation layer."""
