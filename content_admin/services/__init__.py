"""Data store access and per-module CRUD services."""
