# -*- coding: utf-8 -*-
#
# This file is part of Invenio.
# Copyright (C) 2015-2019 CERN.
#
# Invenio is free software; you can redistribute it and/or modify it
# under the terms of the MIT License; see LICENSE file for more details.

"""Index migration API."""

from .batch import fetch_page, to_write_batch, write_batch
from .job import MigrationJob, MigrationResult, Page
from .mapping import MappingInstaller
from .migration import Migration

__all__ = (
    'fetch_page',
    'MappingInstaller',
    'Migration',
    'MigrationJob',
    'MigrationResult',
    'Page',
    'to_write_batch',
    'write_batch',
)
