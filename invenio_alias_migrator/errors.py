# -*- coding: utf-8 -*-
#
# This file is part of Invenio.
# Copyright (C) 2015-2019 CERN.
#
# Invenio is free software; you can redistribute it and/or modify it
# under the terms of the MIT License; see LICENSE file for more details.

"""Errors raised while migrating an index."""


class AliasMigratorError(Exception):
    """Base class for index migration errors."""


class ConfigurationError(AliasMigratorError):
    """Missing or invalid migration parameters or schema document."""


class RetrievalError(AliasMigratorError):
    """A page of source documents could not be fetched."""

    def __init__(self, index, offset, limit, cause=None):
        """Initialize exception."""
        self.index = index
        self.offset = offset
        self.limit = limit
        self.cause = cause
        super(RetrievalError, self).__init__(
            'Failed to fetch {} document(s) from {} at offset {}: {}'.format(
                limit, index, offset, cause))


class WriteError(AliasMigratorError):
    """A bulk write request was rejected as a whole."""

    def __init__(self, size, cause=None):
        """Initialize exception."""
        self.size = size
        self.cause = cause
        super(WriteError, self).__init__(
            'Failed to bulk write {} operation(s): {}'.format(size, cause))


class PartialWriteError(AliasMigratorError):
    """Some operations of an accepted bulk write failed.

    This error is only reported, never raised: a migration keeps going past
    it, so delivery is at-least-once for the documents that did make it.
    """

    def __init__(self, failures):
        """Initialize exception.

        :param failures: the failed items of the bulk response.
        """
        self.failures = failures
        super(PartialWriteError, self).__init__(
            '{} bulk operation(s) failed: {}'.format(
                len(failures), [_item_id(item) for item in failures]))


class MappingError(AliasMigratorError):
    """Setting up the destination index mapping failed."""

    def __init__(self, index, state, cause=None):
        """Initialize exception.

        :param state: the last state the destination index reached.
        """
        self.index = index
        self.state = state
        self.cause = cause
        super(MappingError, self).__init__(
            'Failed to update mapping of {} (reached state {}): {}'.format(
                index, state, cause))


class CutoverError(AliasMigratorError):
    """The alias could not be moved to the destination index."""

    def __init__(self, alias, source, dest, cause=None):
        """Initialize exception."""
        self.alias = alias
        self.source = source
        self.dest = dest
        self.cause = cause
        super(CutoverError, self).__init__(
            'Failed to move alias {} from {} to {}: {}. The copy is complete, '
            'retry with the "rollover" command.'.format(
                alias, source, dest, cause))


def _item_id(item):
    """Return the document id of a bulk response item."""
    for result in item.values():
        return result.get('_id')
