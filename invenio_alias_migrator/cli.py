# -*- coding: utf-8 -*-
#
# This file is part of Invenio.
# Copyright (C) 2015-2019 CERN.
#
# Invenio is free software; you can redistribute it and/or modify it
# under the terms of the MIT License; see LICENSE file for more details.

"""Alias migration CLI commands."""

import json

import click
from flask import current_app
from flask.cli import with_appcontext
from invenio_search.cli import index as index_cmd

from .api import Migration
from .errors import AliasMigratorError
from .proxies import current_alias_migrator


JOB_OPTIONS = (
    click.option('--source', '-s', required=True,
                 help='Index the documents are copied from.'),
    click.option('--dest', '-d', required=True,
                 help='Index the documents are copied into.'),
    click.option('--alias', '-a', required=True,
                 help='Alias to move from the source to the destination.'),
    click.option('--host', help='Elasticsearch host.'),
    click.option('--port', type=int, help='Elasticsearch port.'),
    click.option('--api-version', help='Elasticsearch API version.'),
)


def job_options(f):
    """Add the options identifying a migration and its cluster."""
    for option in reversed(JOB_OPTIONS):
        f = option(f)
    return f


def build_migration(source, dest, alias, host=None, port=None,
                    api_version=None, page_size=None, mapping=None):
    """Create the migration, filling missing options from the config."""
    cfg = current_app.config
    try:
        return Migration.create_from_config(
            current_alias_migrator.client(host=host, port=port),
            source=source,
            dest=dest,
            alias=alias,
            page_size=page_size if page_size is not None
            else cfg['ALIAS_MIGRATOR_PAGE_SIZE'],
            api_version=api_version or cfg['ALIAS_MIGRATOR_API_VERSION'],
            sort_field=cfg['ALIAS_MIGRATOR_SORT_FIELD'],
            mapping=mapping,
        )
    except AliasMigratorError as e:
        raise click.ClickException(str(e))


@index_cmd.group('alias-migration')
def alias_migration():
    """Manage alias-based index migrations."""
    pass


@alias_migration.command('run')
@with_appcontext
@job_options
@click.option('--page-size', type=int,
              help='Number of documents per page and bulk write.')
@click.option('--mapping', type=click.Path(exists=True, dir_okay=False),
              help='JSON settings/mappings to apply to the destination.')
@click.option('--yes-i-know', is_flag=True)
def run_migration(source, dest, alias, host, port, api_version, page_size,
                  mapping, yes_i_know):
    """Copy an index into a new one and move the alias to it."""
    migration = build_migration(
        source, dest, alias, host=host, port=port, api_version=api_version,
        page_size=page_size, mapping=mapping)
    job = migration.job

    click.secho(
        '******* Information collected for this migration *******', fg='green')
    click.echo('Source index: {}'.format(job.source))
    click.echo('Destination index: {}'.format(job.dest))
    click.echo('Alias: {}'.format(job.alias))
    click.echo('Page size: {}'.format(job.page_size))
    click.echo('Mapping file path: {}'.format(job.mapping))
    yes_i_know or click.confirm(
        'Are you sure you want to run this migration?',
        default=False, abort=True
    )

    try:
        result = migration.run()
    except AliasMigratorError as e:
        raise click.ClickException(str(e))

    if result.failures:
        click.secho(
            '{} document(s) failed to be written, see the logs.'.format(
                result.failures), fg='yellow')
    click.secho(
        'Migration complete: {} document(s) copied in {} page(s), alias {} '
        'now points to {}.'.format(
            result.documents, result.pages, job.alias, job.dest), fg='green')


@alias_migration.command('rollover')
@with_appcontext
@job_options
def rollover_migration(source, dest, alias, host, port, api_version):
    """Move the alias to the destination index only."""
    migration = build_migration(
        source, dest, alias, host=host, port=port, api_version=api_version)
    try:
        migration.rollover()
    except AliasMigratorError as e:
        raise click.ClickException(str(e))
    click.secho('Alias {} now points to {}.'.format(alias, dest), fg='green')


@alias_migration.command('status')
@with_appcontext
@job_options
def status_migration(source, dest, alias, host, port, api_version):
    """Show where the alias points and the document counts."""
    migration = build_migration(
        source, dest, alias, host=host, port=port, api_version=api_version)
    try:
        status = migration.status()
    except AliasMigratorError as e:
        raise click.ClickException(str(e))
    click.echo(json.dumps(status, sort_keys=True, indent=2))
