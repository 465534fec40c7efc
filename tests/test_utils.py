# -*- coding: utf-8 -*-
#
# This file is part of Invenio.
# Copyright (C) 2015-2019 CERN.
#
# Invenio is free software; you can redistribute it and/or modify it
# under the terms of the MIT License; see LICENSE file for more details.

"""Utility function tests."""

import pytest

from invenio_alias_migrator.errors import ConfigurationError
from invenio_alias_migrator.utils import es_client_factory, \
    load_schema_document, obj_or_import_string, parse_api_version


def test_obj_or_import_string():
    """Test import strings and objects."""
    assert obj_or_import_string(
        'invenio_alias_migrator.utils.es_client_factory') is es_client_factory
    assert obj_or_import_string(len) is len
    assert obj_or_import_string(None, default=len) is len


@pytest.mark.parametrize('version,major', [
    ('1.1', 1), ('6.8', 6), ('7', 7), (7, 7), ('7.x', 7),
])
def test_parse_api_version(version, major):
    """Test reading the major API version."""
    assert parse_api_version(version) == major


def test_parse_invalid_api_version():
    """Test an API version without a major number."""
    with pytest.raises(ConfigurationError):
        parse_api_version('latest')


def test_load_schema_document(schema_file):
    """Test loading a valid schema document."""
    schema = load_schema_document(schema_file)
    assert 'analysis' in schema['index']


@pytest.mark.parametrize('content', ['{"index": ', '[1, 2]', '"settings"'])
def test_load_invalid_schema_document(tmp_path, content):
    """Test schema documents which are not JSON objects."""
    path = tmp_path / 'mapping.json'
    path.write_text(content)
    with pytest.raises(ConfigurationError):
        load_schema_document(str(path))


def test_load_missing_schema_document(tmp_path):
    """Test a schema document path that doesn't exist."""
    with pytest.raises(ConfigurationError):
        load_schema_document(str(tmp_path / 'missing.json'))
