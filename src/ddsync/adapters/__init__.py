"""Adapters binding the domain ports to the registrar API and the billing database."""
