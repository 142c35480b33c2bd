"""Visitor Management package.

Feature modules (visitors, hosts, lookups, settings, statistics) sit on top of a
resilient MySQL data-access layer, with a thin Flask controller layer and
service/repository layers underneath.
"""
