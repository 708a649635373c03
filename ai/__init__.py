"""Automated opponents: alpha-beta minimax over the draughts rules engine."""
