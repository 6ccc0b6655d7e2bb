import os
import json
import logging
import uuid
from datetime import datetime, timezone
from decimal import Decimal

logger = logging.getLogger("event_lambda")
logger.setLevel(logging.INFO)

_table = None


def _get_table():
    global _table
    if _table is None:
        import boto3

        _table = boto3.resource('dynamodb').Table(os.environ['EVENT_SOURCE_TABLE_NAME'])
    return _table


def _response(status_code, payload):
    return {
        'statusCode': status_code,
        'headers': {'Content-Type': 'application/json'},
        'body': json.dumps(payload),
    }


def main(event, context, table=None):
    if table is None:
        table = _get_table()

    try:
        # DynamoDB only accepts Decimal for fractional numbers
        body = json.loads(event.get('body') or '{}', parse_float=Decimal)
    except json.JSONDecodeError:
        logger.warning("Rejected request with malformed JSON body")
        return _response(400, {'message': 'Request body must be valid JSON'})
    if not isinstance(body, dict):
        return _response(400, {'message': 'Request body must be a JSON object'})

    item = dict(body)
    if item.get('eventId') is None:
        item['eventId'] = uuid.uuid4()
    if item.get('timestamp') is None:
        item['timestamp'] = datetime.now(timezone.utc).isoformat()

    # Both key attributes are string-typed on the table
    for key in ('eventId', 'timestamp'):
        item[key] = str(item[key])
        if not item[key]:
            return _response(400, {'message': f'{key} must not be empty'})

    table.put_item(Item=item)
    logger.info("Stored event %s at %s", item['eventId'], item['timestamp'])

    return _response(201, {'eventId': item['eventId'], 'timestamp': item['timestamp']})
