#-------------------------------------------------------------------------
# Copyright (c) Microsoft.  All rights reserved.
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#   http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.
#--------------------------------------------------------------------------
from datetime import date

from azure.common import AzureException
from dateutil import parser

_ERROR_VALUE_NONE = '{0} should not be None.'
_ERROR_VALUE_NONE_OR_EMPTY = '{0} should not be None or empty.'
_ERROR_VALUE_NOT_STRING = '{0} should be a string or a value castable to string, got {1}.'
_ERROR_VALUE_NOT_DATE_STRING = '{0} should be a valid date string, got {1!r}.'
_ERROR_VALUE_NOT_ONE_OF = '{0} should be one of {1}, got {2!r}.'
_ERROR_VALUE_TOO_LONG = '{0} should be at most {1} characters long.'
_ERROR_VALUE_NOT_UTF8 = '{0} should only contain characters that can be encoded as UTF-8.'
_ERROR_INVALID_PERMISSIONS = \
    'Permissions {0!r} contain characters outside of {1} or repeated characters.'
_ERROR_INVALID_PROTOCOL = \
    'signed_protocol should be \'https\' or \'https,http\', got {0!r}.'
_ERROR_STORAGE_MISSING_INFO = \
    'You need to provide an account name and an account key.'
_ERROR_INVALID_CONNECTION_STRING = \
    'Connection string is malformed, expected \'Key=Value\' pairs separated by \';\'.'
_ERROR_DECODE_ACCOUNT_KEY = \
    'The account key could not be decoded from base64. Check the account key configuration.'


class AzureSigningError(AzureException):
    """
    Represents a fatal error when attempting to sign a request.
    In general, the cause of this exception is user error. For example, the given account key is not valid.
    Please visit https://docs.microsoft.com/en-us/azure/storage/common/storage-create-storage-account for more info.
    """
    pass


def _wrap_exception(ex, desired_type, message=None):
    msg = message or ''
    if not message and len(ex.args) > 0:
        msg = ex.args[0]
    return desired_type('{}: {}'.format(ex.__class__.__name__, msg))


def _is_string_castable(value):
    if value is None or isinstance(value, (str, int, float)):
        return True
    # dates need an explicit ISO-8601 conversion and bytes would render as a repr
    if isinstance(value, (date, bytes, bytearray)):
        return False
    return type(value).__str__ is not object.__str__


def _validate_not_none(param_name, param):
    if param is None:
        raise ValueError(_ERROR_VALUE_NONE.format(param_name))


def _validate_not_none_or_empty(param_name, param):
    if param is None or (hasattr(param, '__len__') and len(param) == 0):
        raise ValueError(_ERROR_VALUE_NONE_OR_EMPTY.format(param_name))


def _validate_can_cast_as_string(param_name, param):
    if not _is_string_castable(param):
        raise ValueError(_ERROR_VALUE_NOT_STRING.format(param_name, type(param).__name__))


def _validate_is_date_string(param_name, param):
    try:
        parser.parse(param)
    except (ValueError, OverflowError, TypeError):
        raise ValueError(_ERROR_VALUE_NOT_DATE_STRING.format(param_name, param))


def _validate_is_one_of(param_name, param, choices):
    if param not in choices:
        raise ValueError(_ERROR_VALUE_NOT_ONE_OF.format(param_name, ', '.join(choices), param))


def _validate_max_length(param_name, param, max_length):
    if param is not None and len(param) > max_length:
        raise ValueError(_ERROR_VALUE_TOO_LONG.format(param_name, max_length))


def _validate_is_utf8_encodable(param_name, param):
    if param is None:
        return
    try:
        str(param).encode('utf-8')
    except UnicodeEncodeError:
        raise ValueError(_ERROR_VALUE_NOT_UTF8.format(param_name))
