"""Shared utilities and cross-cutting helpers (datetime, ids, logging)."""
