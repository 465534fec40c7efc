# -*- coding: utf-8 -*-
#
# This file is part of Invenio.
# Copyright (C) 2015-2019 CERN.
#
# Invenio is free software; you can redistribute it and/or modify it
# under the terms of the MIT License; see LICENSE file for more details.

"""Alias migrator extension."""

from flask import current_app
from werkzeug.utils import cached_property

from . import config
from .cli import index_cmd
from .utils import obj_or_import_string


class InvenioAliasMigrator(object):
    """Invenio alias migrator extension."""

    def __init__(self, app=None, **kwargs):
        """Extension initialization.

        :param app: An instance of :class:`~flask.app.Flask`.
        """
        if app:
            self.init_app(app, **kwargs)

    @cached_property
    def client_factory(self):
        """Get the configured store client factory."""
        return obj_or_import_string(
            current_app.config['ALIAS_MIGRATOR_CLIENT_FACTORY'])

    def client(self, host=None, port=None):
        """Build a store client, defaulting to the configured node."""
        cfg = current_app.config
        return self.client_factory(
            host if host is not None else cfg['ALIAS_MIGRATOR_HOST'],
            port if port is not None else cfg['ALIAS_MIGRATOR_PORT'],
        )

    def init_app(self, app):
        """Flask application initialization.

        :param app: An instance of :class:`~flask.app.Flask`.
        """
        self.init_config(app)
        app.cli.add_command(index_cmd)
        app.extensions['invenio-alias-migrator'] = self

    @staticmethod
    def init_config(app):
        """Initialize configuration.

        :param app: An instance of :class:`~flask.app.Flask`.
        """
        for k in dir(config):
            if k.startswith('ALIAS_MIGRATOR_'):
                app.config.setdefault(k, getattr(config, k))
