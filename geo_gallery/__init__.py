"""Geo Gallery: image metadata store with gallery and map projections."""
