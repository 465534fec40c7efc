# -*- coding: utf-8 -*-
#
# This file is part of Invenio.
# Copyright (C) 2015-2019 CERN.
#
# Invenio is free software; you can redistribute it and/or modify it
# under the terms of the MIT License; see LICENSE file for more details.

"""Index migration API."""

from elasticsearch.exceptions import ElasticsearchException, NotFoundError
from flask import current_app

from ..errors import AliasMigratorError, CutoverError
from .batch import fetch_page, to_write_batch, write_batch
from .job import MigrationJob, MigrationResult
from .mapping import MappingInstaller


class Migration(object):
    """Copy an index into a new one and move its alias over.

    The steps run strictly one after the other and the first error aborts
    the migration: the mapping setup, then the page by page copy, then the
    alias cutover. Nothing is checkpointed, a failed migration is rerun
    from the start.
    """

    def __init__(self, job, client):
        """Initialize the migration.

        :param job: a :class:`~invenio_alias_migrator.api.job.MigrationJob`.
        :param client: Elasticsearch client.
        """
        self.job = job
        self.client = client

    @classmethod
    def create_from_config(cls, client, **params):
        """Create `Migration` instance from the job parameters."""
        return cls(MigrationJob.create(**params), client)

    def setup_mapping(self):
        """Apply the job's schema document to the destination index."""
        return MappingInstaller(
            self.client, self.job.dest, self.job.mapping).install()

    def copy(self):
        """Copy all source documents, one page at a time."""
        job = self.job
        offset = 0
        search_after = None
        pages = documents = failures = 0
        while True:
            page = fetch_page(
                self.client, job.source, offset, job.page_size, sort=job.sort,
                search_after=search_after)
            batch = to_write_batch(
                page, job.dest, doc_types=job.uses_doc_types)
            succeeded, failed = write_batch(self.client, batch)
            pages += 1
            documents += succeeded
            failures += len(failed)
            if page.is_last:
                break
            offset += job.page_size
            search_after = page.last_sort

        current_app.logger.info(
            'migration complete: %s document(s) copied from %s to %s in %s '
            'page(s), %s failed', documents, job.source, job.dest, pages,
            failures)
        return MigrationResult(
            pages=pages, documents=documents, failures=failures)

    def rollover(self):
        """Move the alias from the source to the destination index.

        Both alias actions are sent in one request, so readers of the alias
        always see exactly one of the two indices.
        """
        job = self.job
        try:
            self.client.indices.refresh(index=job.dest)
            src_count = self.client.count(index=job.source)['count']
            dst_count = self.client.count(index=job.dest)['count']
        except ElasticsearchException as e:
            raise CutoverError(job.alias, job.source, job.dest, e) from e
        if src_count != dst_count:
            current_app.logger.warning(
                '%s holds %s document(s) but %s holds %s',
                job.source, src_count, job.dest, dst_count)

        current_app.logger.info('updating aliases')
        payload = dict(actions=[
            {"remove": {"index": job.source, "alias": job.alias}},
            {"add": {"index": job.dest, "alias": job.alias}},
        ])
        try:
            self.client.indices.update_aliases(body=payload)
        except ElasticsearchException as e:
            current_app.logger.error('index update error: %s', e)
            raise CutoverError(job.alias, job.source, job.dest, e) from e
        current_app.logger.info(
            'alias %s moved from %s to %s', job.alias, job.source, job.dest)

    def run(self):
        """Run the whole migration."""
        self.setup_mapping()
        result = self.copy()
        self.rollover()
        return result

    def status(self):
        """Get the alias targets and document counts of both indices."""
        job = self.job
        try:
            return dict(
                alias=dict(name=job.alias, indices=self._alias_indices()),
                source=dict(index=job.source, count=self._count(job.source)),
                dest=dict(index=job.dest, count=self._count(job.dest)),
            )
        except ElasticsearchException as e:
            raise AliasMigratorError(
                'Failed to get the status of alias {}: {}'.format(
                    job.alias, e)) from e

    def _alias_indices(self):
        try:
            return sorted(self.client.indices.get_alias(name=self.job.alias))
        except NotFoundError:
            return []

    def _count(self, index):
        try:
            return self.client.count(index=index)['count']
        except NotFoundError:
            return None
