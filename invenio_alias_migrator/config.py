# -*- coding: utf-8 -*-
#
# This file is part of Invenio.
# Copyright (C) 2015-2019 CERN.
#
# Invenio is free software; you can redistribute it and/or modify it
# under the terms of the MIT License; see LICENSE file for more details.

"""Configuration for alias-based index migrations."""

ALIAS_MIGRATOR_HOST = 'localhost'
"""Host of the Elasticsearch node used when ``--host`` is not given."""

ALIAS_MIGRATOR_PORT = 9200
"""Port of the Elasticsearch node used when ``--port`` is not given."""

ALIAS_MIGRATOR_API_VERSION = '7'
"""Elasticsearch API version spoken to the cluster.

Clusters older than 7 still have mapping types, so documents are written
with their original ``_type``. From 7 on, types are left out.
"""

ALIAS_MIGRATOR_PAGE_SIZE = 100
"""Number of documents fetched and bulk written at a time."""

ALIAS_MIGRATOR_SORT_FIELD = '$ts'
"""Field the source documents are paged by, in ascending order.

Paging by offset is only stable if the ordering is, so this should be a
timestamp-like field that is not updated during the migration.
"""

ALIAS_MIGRATOR_CLIENT_FACTORY = \
    'invenio_alias_migrator.utils.es_client_factory'
"""Import path (or callable) building the client: ``factory(host, port)``.

Example:

.. code-block:: python

    def my_client_factory(host, port):
        return Elasticsearch([dict(host=host, port=port)], timeout=60)

    ALIAS_MIGRATOR_CLIENT_FACTORY = my_client_factory
"""
