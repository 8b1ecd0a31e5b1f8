"""RoyaleDeck: constrained random deck builder."""
