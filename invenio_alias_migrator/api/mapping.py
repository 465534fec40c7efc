# -*- coding: utf-8 -*-
#
# This file is part of Invenio.
# Copyright (C) 2015-2019 CERN.
#
# Invenio is free software; you can redistribute it and/or modify it
# under the terms of the MIT License; see LICENSE file for more details.

"""Destination index mapping setup."""

from elasticsearch.exceptions import ElasticsearchException
from flask import current_app

from ..errors import MappingError
from ..utils import load_schema_document


class MappingInstaller(object):
    """Apply a settings/mappings document to the destination index.

    Some settings can't be changed on an open index, so the index is
    created if needed, then closed, updated and reopened. A failure at any
    step is fatal: the index state is not inspected to resume from it.
    """

    ABSENT = 'ABSENT'
    CREATED = 'CREATED'
    CLOSED = 'CLOSED'
    CONFIGURED = 'CONFIGURED'
    OPENED = 'OPENED'

    def __init__(self, client, index, mapping=None):
        """Initialize the installer.

        :param client: Elasticsearch client.
        :param index: destination index name.
        :param mapping: path to the schema document, ``None`` to skip.
        """
        self.client = client
        self.index = index
        self.mapping = mapping
        self.state = None

    def install(self):
        """Run the setup, return the applied schema document (if any)."""
        if not self.mapping:
            current_app.logger.info(
                'no mapping given, keeping settings of %s', self.index)
            return None

        # Parse errors must surface before the index is touched.
        schema = load_schema_document(self.mapping)
        try:
            self._ensure_created()
            self.client.indices.close(index=self.index)
            self._transition(self.CLOSED)
            self.client.indices.put_settings(index=self.index, body=schema)
            self._transition(self.CONFIGURED)
            self.client.indices.open(index=self.index)
            self._transition(self.OPENED)
        except ElasticsearchException as e:
            current_app.logger.error(
                'failed to update mapping of %s: %s', self.index, e)
            raise MappingError(self.index, self.state, e) from e
        return schema

    def _ensure_created(self):
        if self.client.indices.exists(index=self.index):
            self._transition(self.CREATED)
            return
        self._transition(self.ABSENT)
        self.client.indices.create(index=self.index)
        self._transition(self.CREATED)

    def _transition(self, state):
        self.state = state
        current_app.logger.info('index %s is %s', self.index, state.lower())
