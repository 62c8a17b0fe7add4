######################################################################################################################
#  Copyright Amazon.com, Inc. or its affiliates. All Rights Reserved.                                                #
#                                                                                                                    #
#  Licensed under the Apache License, Version 2.0 (the "License"). You may not use this file except in compliance    #
#  with the License. A copy of the License is located at                                                             #
#                                                                                                                    #
#      http://www.apache.org/licenses/LICENSE-2.0                                                                    #
#                                                                                                                    #
#  or in the "license" file accompanying this file. This file is distributed on an "AS IS" BASIS, WITHOUT WARRANTIES #
#  OR CONDITIONS OF ANY KIND, express or implied. See the License for the specific language governing permissions    #
#  and limitations under the License.                                                                                #
######################################################################################################################

from typing import NamedTuple

TARGET_BUCKET_ENV = 'TARGET_BUCKET'
TARGET_KEY_PREFIX_ENV = 'TARGET_KEY_PREFIX'


class ConfigurationError(Exception):
    pass


class AccessLogMoverConfig(NamedTuple):
    """
    Destination of moved access logs. Built once when the function starts.

    target_key_prefix is written in front of the partition path, so it has
    no leading slash and ends with one, e.g. 'cloudfront/'.
    """
    target_bucket: str
    target_key_prefix: str


def validate_config(target_bucket, target_key_prefix) -> AccessLogMoverConfig:
    if not target_bucket:
        raise ConfigurationError("%s must be set to the destination bucket name." % TARGET_BUCKET_ENV)
    if not target_key_prefix:
        raise ConfigurationError("%s must be set to the destination key prefix." % TARGET_KEY_PREFIX_ENV)
    if target_key_prefix.startswith('/'):
        raise ConfigurationError("%s must not start with a slash: %s"
                                 % (TARGET_KEY_PREFIX_ENV, target_key_prefix))
    if not target_key_prefix.endswith('/'):
        raise ConfigurationError("%s must end with a slash: %s"
                                 % (TARGET_KEY_PREFIX_ENV, target_key_prefix))
    return AccessLogMoverConfig(target_bucket, target_key_prefix)


def load_config(env) -> AccessLogMoverConfig:
    """
    Read the mover configuration from a mapping of environment variables.

    Raises ConfigurationError when a value is missing or malformed.
    """
    return validate_config(env.get(TARGET_BUCKET_ENV, ''), env.get(TARGET_KEY_PREFIX_ENV, ''))
