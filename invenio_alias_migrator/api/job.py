# -*- coding: utf-8 -*-
#
# This file is part of Invenio.
# Copyright (C) 2015-2019 CERN.
#
# Invenio is free software; you can redistribute it and/or modify it
# under the terms of the MIT License; see LICENSE file for more details.

"""Migration job definition and the values passed between its steps."""

from collections import namedtuple

from .. import config
from ..errors import ConfigurationError
from ..utils import parse_api_version

REQUIRED_PARAMS = ('source', 'dest', 'alias')

_MigrationJob = namedtuple('_MigrationJob', (
    'source', 'dest', 'alias', 'page_size', 'api_version', 'sort_field',
    'mapping',
))


class MigrationJob(_MigrationJob):
    """Configuration of one migration run.

    :param source: index the documents are copied from.
    :param dest: index the documents are copied into.
    :param alias: alias moved from ``source`` to ``dest`` at the end.
    :param page_size: number of documents per page and bulk write.
    :param api_version: Elasticsearch API version of the cluster.
    :param sort_field: field the source is paged by (ascending).
    :param mapping: optional path to a settings/mappings JSON document.
    """

    __slots__ = ()

    @classmethod
    def create(cls, source=None, dest=None, alias=None, page_size=None,
               api_version=None, sort_field=None, mapping=None):
        """Validate the parameters and create the job."""
        params = dict(source=source, dest=dest, alias=alias)
        missing = [p for p in REQUIRED_PARAMS if not params[p]]
        if missing:
            raise ConfigurationError(
                'Required input parameters are missing {}'.format(missing))
        if source == dest:
            raise ConfigurationError(
                'Source and destination index are the same ({}).'.format(
                    source))

        if page_size is None:
            page_size = config.ALIAS_MIGRATOR_PAGE_SIZE
        if isinstance(page_size, bool) or not isinstance(page_size, int) \
                or page_size < 1:
            raise ConfigurationError(
                'Page size must be a positive integer, got {!r}.'.format(
                    page_size))

        if api_version is None:
            api_version = config.ALIAS_MIGRATOR_API_VERSION
        parse_api_version(api_version)

        return cls(
            source=source,
            dest=dest,
            alias=alias,
            page_size=page_size,
            api_version=str(api_version),
            sort_field=sort_field or config.ALIAS_MIGRATOR_SORT_FIELD,
            mapping=mapping,
        )

    @property
    def uses_doc_types(self):
        """Whether documents are addressed with their ``_type``."""
        return parse_api_version(self.api_version) < 7

    @property
    def sort(self):
        """Sort clause giving a stable, total and ascending page order."""
        return [
            {self.sort_field: dict(order='asc', unmapped_type='date')},
            {'_id': dict(order='asc')},
        ]


class Page(namedtuple('Page', ('documents', 'offset', 'limit'))):
    """Ordered slice of source documents fetched at ``offset``."""

    __slots__ = ()

    @property
    def is_last(self):
        """A page shorter than requested means the source is exhausted."""
        return len(self.documents) < self.limit

    @property
    def last_sort(self):
        """Sort values of the last document, where the next page starts."""
        if self.documents:
            return self.documents[-1].get('sort')


MigrationResult = namedtuple('MigrationResult', (
    'pages', 'documents', 'failures',
))
"""Outcome of the copy: pages fetched, documents written, failed writes."""
