# -*- coding: utf-8 -*-
#
# This file is part of Invenio.
# Copyright (C) 2015-2019 CERN.
#
# Invenio is free software; you can redistribute it and/or modify it
# under the terms of the MIT License; see LICENSE file for more details.


"""Pytest configuration."""

import json

import pytest
from elasticsearch.exceptions import NotFoundError, TransportError
from flask import Flask

from invenio_alias_migrator import InvenioAliasMigrator
from invenio_alias_migrator.api import MigrationJob


class FakeIndices(object):
    """Indices namespace of :class:`FakeClient`."""

    def __init__(self, client):
        self.client = client

    def exists(self, index):
        self.client.record('exists', index=index)
        return index in self.client.documents

    def create(self, index):
        self.client.record('create', index=index)
        self.client.documents.setdefault(index, {})

    def close(self, index):
        self.client.record('close', index=index)
        self.client.closed.add(index)

    def put_settings(self, index, body):
        self.client.record('put_settings', index=index, body=body)
        self.client.settings[index] = body

    def open(self, index):
        self.client.record('open', index=index)
        self.client.closed.discard(index)

    def refresh(self, index):
        self.client.record('refresh', index=index)

    def update_aliases(self, body):
        self.client.record('update_aliases', body=body)
        for action in body['actions']:
            for op, params in action.items():
                indices = self.client.aliases.setdefault(params['alias'], set())
                if op == 'add':
                    indices.add(params['index'])
                else:
                    indices.discard(params['index'])

    def get_alias(self, name):
        self.client.record('get_alias', name=name)
        indices = self.client.aliases.get(name)
        if not indices:
            raise NotFoundError(404, 'alias [{}] missing'.format(name), {})
        return {index: dict(aliases={name: {}}) for index in indices}


class FakeClient(object):
    """In-memory document store answering the Elasticsearch calls we use.

    ``fail_on`` maps a call name to the (1-based) call numbers that raise a
    transport error; ``reject_ids`` are document ids bulk writes refuse.
    Like Elasticsearch, searches reaching past ``max_result_window`` fail;
    ``positions`` are the start positions of the pages served.
    """

    def __init__(self):
        self.documents = {}
        self.settings = {}
        self.closed = set()
        self.aliases = {}
        self.calls = []
        self.fail_on = {}
        self.reject_ids = set()
        self.max_result_window = 10000
        self.positions = []
        self.indices = FakeIndices(self)

    def record(self, call, **kwargs):
        self.calls.append((call, kwargs))
        count = len(self.calls_to(call))
        if count in self.fail_on.get(call, ()):
            raise TransportError(500, 'internal_server_error', {})

    def calls_to(self, name):
        return [kwargs for call, kwargs in self.calls if call == name]

    def seed(self, index, count, doc_type='_doc'):
        docs = self.documents.setdefault(index, {})
        for i in range(count):
            docs[str(i)] = (doc_type, {'title': 'doc {}'.format(i), '$ts': i})

    def search(self, index, body, from_, size):
        self.record('search', index=index, body=body, from_=from_, size=size)
        if from_ + size > self.max_result_window:
            raise TransportError(
                400, 'search_phase_execution_exception',
                'Result window is too large, from + size must be less than '
                'or equal to: [{}]'.format(self.max_result_window))

        fields = [list(clause)[0] for clause in body.get('sort', [])]

        def sort_values(item):
            doc_id, (_, source) = item
            return [doc_id if f == '_id' else source.get(f) for f in fields]

        docs = list(self.documents[index].items())
        if fields:
            docs.sort(key=sort_values)
        start = 0
        if 'search_after' in body:
            start = len([
                item for item in docs
                if sort_values(item) <= body['search_after']
            ])
        start += from_
        self.positions.append(start)
        return dict(hits=dict(
            total=dict(value=len(docs)),
            hits=[
                dict(_index=index, _type=doc_type, _id=doc_id, _source=source,
                     sort=sort_values((doc_id, (doc_type, source))))
                for doc_id, (doc_type, source) in docs[start:start + size]
            ],
        ))

    def bulk(self, body):
        self.record('bulk', body=body)
        items = []
        for action, source in zip(body[::2], body[1::2]):
            params = action['index']
            if params['_id'] in self.reject_ids:
                items.append(dict(index=dict(
                    _id=params['_id'], status=400,
                    error=dict(type='mapper_parsing_exception'))))
                continue
            docs = self.documents.setdefault(params['_index'], {})
            docs[params['_id']] = (params.get('_type', '_doc'), source)
            items.append(dict(index=dict(_id=params['_id'], status=201)))
        return dict(
            errors=any('error' in item['index'] for item in items),
            items=items,
        )

    def count(self, index):
        self.record('count', index=index)
        if index not in self.documents:
            raise NotFoundError(404, 'index_not_found_exception', {})
        return dict(count=len(self.documents[index]))


@pytest.fixture()
def client():
    """Empty in-memory store."""
    return FakeClient()


@pytest.fixture()
def logs_client(client):
    """Store with 250 documents in ``logs_v1`` behind the ``logs`` alias."""
    client.seed('logs_v1', 250)
    client.aliases['logs'] = {'logs_v1'}
    return client


@pytest.fixture()
def app(client):
    """Flask application with the extension using the in-memory store."""
    app = Flask('testapp')
    app.config.update(
        TESTING=True,
        ALIAS_MIGRATOR_CLIENT_FACTORY=lambda host, port: client,
    )
    InvenioAliasMigrator(app)
    with app.app_context():
        yield app


@pytest.fixture()
def job():
    """Migration of ``logs_v1`` into ``logs_v2``."""
    return MigrationJob.create(
        source='logs_v1', dest='logs_v2', alias='logs', page_size=100)


@pytest.fixture()
def schema_file(tmp_path):
    """Schema document on disk."""
    path = tmp_path / 'mapping.json'
    path.write_text(json.dumps(dict(index=dict(
        analysis=dict(analyzer=dict(folded=dict(
            tokenizer='standard', filter=['lowercase', 'asciifolding'])))
    ))))
    return str(path)
