# -*- coding: utf-8 -*-
#
# This file is part of Invenio.
# Copyright (C) 2015-2019 CERN.
#
# Invenio is free software; you can redistribute it and/or modify it
# under the terms of the MIT License; see LICENSE file for more details.

"""Fetch, transform and bulk write one page of documents."""

from elasticsearch.exceptions import ElasticsearchException
from flask import current_app

from ..errors import PartialWriteError, RetrievalError, WriteError
from .job import Page


def fetch_page(client, index, offset, limit, sort=None, search_after=None):
    """Fetch one ordered page of documents.

    Past the first page, ``search_after`` (the sort values of the previous
    page's last hit) is used instead of ``from``, so paging isn't bounded by
    the index ``max_result_window``.

    :param client: Elasticsearch client.
    :param index: index to read from.
    :param offset: position of the first document of the page.
    :param limit: maximum number of documents in the page.
    :param sort: sort clause, it should give a stable and total order.
    :param search_after: sort values of the hit preceding the page.
    :returns: a :class:`~invenio_alias_migrator.api.job.Page`.
    """
    current_app.logger.info(
        'getting batch from %s (offset=%s, limit=%s)', index, offset, limit)
    body = dict(query=dict(match_all={}))
    if sort:
        body['sort'] = sort
    from_ = offset
    if search_after:
        body['search_after'] = search_after
        from_ = 0
    try:
        results = client.search(
            index=index, body=body, from_=from_, size=limit)
    except ElasticsearchException as e:
        raise RetrievalError(index, offset, limit, e) from e

    try:
        hits = results['hits']['hits']
    except (KeyError, TypeError):
        raise RetrievalError(
            index, offset, limit, 'malformed search response')
    return Page(documents=hits, offset=offset, limit=limit)


def to_write_batch(page, index, doc_types=False):
    """Build the bulk operations copying a page into ``index``.

    Documents keep their id (and type, if ``doc_types`` is set), so writing
    the same page twice leaves a single copy of each document.
    """
    batch = []
    for doc in page.documents:
        action = dict(_index=index, _id=doc['_id'])
        if doc_types:
            action['_type'] = doc['_type']
        batch.append((dict(index=action), doc['_source']))
    return batch


def write_batch(client, batch):
    """Submit a batch as a single bulk request.

    Failures of single operations inside an accepted request are logged and
    returned, they don't stop the migration.

    :returns: tuple ``(succeeded, failures)`` where ``failures`` are the
        failed items of the bulk response.
    :raises WriteError: if the bulk request itself fails.
    """
    if not batch:
        return 0, []

    body = []
    for action, source in batch:
        body.append(action)
        body.append(source)

    current_app.logger.info('processing batch of %s document(s)', len(batch))
    try:
        response = client.bulk(body=body)
    except ElasticsearchException as e:
        raise WriteError(len(batch), e) from e

    failures = []
    if response.get('errors'):
        failures = [
            item for item in response.get('items', [])
            if any('error' in result for result in item.values())
        ]
        current_app.logger.warning(
            'error inserting batch: %s', PartialWriteError(failures))
        for item in failures:
            current_app.logger.debug('failed bulk operation: %s', item)

    succeeded = len(batch) - len(failures)
    current_app.logger.info('batch inserted (%s document(s))', succeeded)
    return succeeded, failures
