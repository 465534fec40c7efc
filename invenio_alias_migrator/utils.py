# -*- coding: utf-8 -*-
#
# This file is part of Invenio.
# Copyright (C) 2015-2019 CERN.
#
# Invenio is free software; you can redistribute it and/or modify it
# under the terms of the MIT License; see LICENSE file for more details.

"""Utility functions for index migration."""

import json

from elasticsearch import Elasticsearch
from werkzeug.utils import import_string

from .errors import ConfigurationError


def obj_or_import_string(value, default=None):
    """Import string or return object.

    :params value: Import path or class object to instantiate.
    :params default: Default object to return if the import fails.
    :returns: The imported object.
    """
    if isinstance(value, str):
        return import_string(value)
    elif value:
        return value
    return default


def es_client_factory(host, port):
    """Build an Elasticsearch client talking to a single node."""
    return Elasticsearch([dict(host=host, port=port)])


def parse_api_version(api_version):
    """Get the major version out of an API version such as ``'6.8'``."""
    try:
        return int(str(api_version).split('.')[0])
    except ValueError:
        raise ConfigurationError(
            'Invalid API version {!r}.'.format(api_version))


def load_schema_document(path):
    """Load the settings/mappings document for the destination index.

    :param path: path to a JSON file holding an object.
    :returns: the parsed document.
    :raises ConfigurationError: if the file can't be read or isn't a JSON
        object.
    """
    try:
        with open(path, 'r') as fp:
            schema = json.load(fp)
    except (OSError, ValueError) as e:
        raise ConfigurationError(
            'Invalid schema document {}: {}'.format(path, e)) from e
    if not isinstance(schema, dict):
        raise ConfigurationError(
            'Invalid schema document {}: expected a JSON object, got {}.'
            .format(path, type(schema).__name__))
    return schema
