# -*- coding: utf-8 -*-
#
# This file is part of Invenio.
# Copyright (C) 2015-2019 CERN.
#
# Invenio is free software; you can redistribute it and/or modify it
# under the terms of the MIT License; see LICENSE file for more details.

"""Invenio module for zero-downtime index migration behind an alias."""

from .ext import InvenioAliasMigrator
from .proxies import current_alias_migrator
from .version import __version__

__all__ = ('__version__', 'InvenioAliasMigrator', 'current_alias_migrator')
