"""Bet ledger: settlement, reporting and screenshot extraction for sports bets."""
