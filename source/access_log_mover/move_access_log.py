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

import re
from os import environ
from typing import NamedTuple
from access_log_config import load_config
from lib.logging_util import set_log_level
from lib.s3_util import S3

# CloudFront names its log files <distribution id>.YYYY-MM-DD-HH.<unique id>.gz
# Groups: year, month, day, hour
DATE_PATTERN = re.compile(r'[^\d](\d{4})-(\d{2})-(\d{2})-(\d{2})[^\d]')
FILENAME_PATTERN = re.compile(r'[^/]+$')

MOVED = 'MOVED'
SKIPPED = 'SKIPPED'

# Read once per execution environment. A bad value fails the Lambda init.
config = load_config(environ)


class TriggerEvent(NamedTuple):
    source_bucket: str
    source_key: str


class LogTimestamp(NamedTuple):
    year: str
    month: str
    day: str
    hour: str


def parse_trigger_event(event) -> TriggerEvent:
    """
    Pull the bucket and key out of an EventBridge "Object Created" event.
    The rest of the envelope is ignored.
    """
    detail = event['detail']
    return TriggerEvent(detail['bucket']['name'], detail['object']['key'])


def parse_log_timestamp(key):
    match = DATE_PATTERN.search(key)
    if match is None:
        return None
    return LogTimestamp(*match.groups())


def parse_filename(key):
    match = FILENAME_PATTERN.search(key)
    if match is None:
        return None
    return match.group(0)


def build_destination_key(prefix, timestamp, filename):
    return '{}{}/{}/{}/{}/{}'.format(
        prefix, timestamp.year, timestamp.month, timestamp.day, timestamp.hour, filename)


class AccessLogMover(object):
    """
    Moves a CloudFront access log into a year/month/day/hour folder structure
    under the target prefix, so Athena partition projection can find it.

    Sample destination:
      cloudfront/2022/05/01/09/E1234ABCD.2022-05-01-09.abcd1234.gz
    """

    def __init__(self, config, s3, log):
        self.config = config
        self.s3 = s3
        self.log = log

    def get_destination_key(self, source_key):
        """
        Return the partitioned key for source_key, or None when the key
        does not look like an access log file.
        """
        timestamp = parse_log_timestamp(source_key)
        if timestamp is None:
            return None

        filename = parse_filename(source_key)
        if filename is None:
            return None

        return build_destination_key(self.config.target_key_prefix, timestamp, filename)

    def skip(self, trigger_event, message):
        return {
            'Status': SKIPPED,
            'SourceBucket': trigger_event.source_bucket,
            'SourceKey': trigger_event.source_key,
            'Message': message
        }

    def move(self, trigger_event):
        source_bucket, source_key = trigger_event
        target_bucket = self.config.target_bucket

        # Writing into the watched bucket would trigger this function again
        if source_bucket == target_bucket:
            message = "Object s3://%s/%s is already in the target bucket, so it will not be moved." \
                      % (source_bucket, source_key)
            self.log.warning("[move_access_log: move] %s" % message)
            return self.skip(trigger_event, message)

        dest_key = self.get_destination_key(source_key)
        if dest_key is None:
            message = "Object key %s does not look like an access log file, so it will not be moved." \
                      % source_key
            self.log.info("[move_access_log: move] %s" % message)
            return self.skip(trigger_event, message)

        self.log.info("[move_access_log: move] Copying s3://%s/%s to s3://%s/%s."
                      % (source_bucket, source_key, target_bucket, dest_key))
        self.s3.copy_object(source_bucket, source_key, target_bucket, dest_key)

        self.log.info("[move_access_log: move] Copied. Now deleting %s." % source_key)
        self.s3.delete_object(source_bucket, source_key)
        self.log.info("[move_access_log: move] Deleted %s." % source_key)

        return {
            'Status': MOVED,
            'SourceBucket': source_bucket,
            'SourceKey': source_key,
            'DestinationBucket': target_bucket,
            'DestinationKey': dest_key
        }


def lambda_handler(event, context):
    """
    Triggered by an EventBridge rule for every object created in the
    CloudFront log bucket. Copies the object to its partitioned key in
    the target bucket, then deletes the original.
    """
    log = set_log_level()
    log.debug('[move_access_log: lambda_handler] Start')

    try:
        log.debug("Lambda Handler Event: \n{}".format(event))

        trigger_event = parse_trigger_event(event)
        mover = AccessLogMover(config, S3(log), log)
        response = mover.move(trigger_event)

    except Exception as error:
        log.error(str(error))
        raise

    log.debug('[move_access_log: lambda_handler] End')
    return response
