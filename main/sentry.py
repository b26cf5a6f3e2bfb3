"""Sentry setup for the web app and the celery workers"""

import logging

import sentry_sdk
from celery.exceptions import WorkerLostError
from sentry_sdk.integrations.celery import CeleryIntegration
from sentry_sdk.integrations.django import DjangoIntegration
from sentry_sdk.integrations.logging import LoggingIntegration

log = logging.getLogger()

# raised in workers that are stopped while a reconciliation task is running;
# acks_late puts the task back on the queue, so it isn't an error
WORKER_SHUTDOWN_ERRORS = (WorkerLostError, SystemExit)


def before_send(event, hint):
    """Drops events for worker shutdowns, passes everything else through"""
    exc_info = hint.get("exc_info")
    if exc_info and isinstance(exc_info[1], WORKER_SHUTDOWN_ERRORS):
        return None
    return event


def init_sentry(*, dsn, environment, version, log_level, traces_sample_rate):
    """
    Initializes sentry if a DSN is configured

    Args:
        dsn (str): the sentry DSN, or an empty string to leave sentry off
        environment (str): the application environment
        version (str): the application version, reported as the release
        log_level (str): log records at or above this level become sentry events
        traces_sample_rate (float): the share of transactions to trace, between 0 and 1
    """
    if not dsn:
        return

    if not 0 <= traces_sample_rate <= 1:
        log.warning(
            "SENTRY_TRACES_SAMPLE_RATE=%s is not between 0 and 1, tracing is off",
            traces_sample_rate,
        )
        traces_sample_rate = 0

    sentry_sdk.init(
        dsn=dsn,
        environment=environment,
        release=version,
        before_send=before_send,
        traces_sample_rate=traces_sample_rate,
        integrations=[
            DjangoIntegration(),
            CeleryIntegration(),
            LoggingIntegration(event_level=log_level),
        ],
    )
