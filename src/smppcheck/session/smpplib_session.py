"""
smpplib Session Adapter

Runs a transceiver session over smpplib. A daemon reader thread reads PDUs,
answers deliver_sm and enquire_link, sends enquire_link whenever the link has
been quiet for the enquire_link interval, and hands every other PDU to on_pdu
as an inbound variant.
"""

import logging
import socket
import ssl
import struct
import threading
from typing import Any, Callable, Dict, Optional

import smpplib.client
import smpplib.exceptions
import smpplib.smpp

from ..config import SessionConfig
from ..exceptions import SMPPSessionException
from ..protocol.charset import gsm7_decode
from ..protocol.constants import DATA_CODING_CODECS, SEVEN_BIT, EsmClassFlag
from ..protocol.udh import NO_CONCAT, ConcatInfo, parse_concat_info, split_user_data
from ..testcase.models import TestCase
from ..utils import mask_sensitive_data
from .base import PDUHandler, SequenceCallback
from .events import (
    DeliverMessage,
    EnquireLinkResponse,
    GenericNack,
    InboundPDU,
    SubmitResponse,
    UnbindResponse,
    UnknownPDU,
)
from .submit import build_submit_params

logger = logging.getLogger(__name__)


def _text(value: Any) -> str:
    if value is None:
        return ''
    if isinstance(value, bytes):
        return value.decode('ascii', errors='replace')
    return str(value)


def decode_text(payload: bytes, data_coding: int) -> str:
    """Decode deliver_sm user data (without UDH) according to its data coding."""
    if data_coding == SEVEN_BIT:
        return gsm7_decode(payload)
    return payload.decode(DATA_CODING_CODECS.get(data_coding, 'utf-8'), errors='replace')


def _sar_concat_info(pdu: Any) -> ConcatInfo:
    reference = getattr(pdu, 'sar_msg_ref_num', None)
    total = getattr(pdu, 'sar_total_segments', None)
    sequence = getattr(pdu, 'sar_segment_seqnum', None)
    if reference is None or not total or not sequence:
        return NO_CONCAT
    return ConcatInfo(total_parts=total, sequence=sequence, reference=reference, found=True)


def decode_deliver_sm(pdu: Any) -> DeliverMessage:
    """
    Build a DeliverMessage from an smpplib deliver_sm.

    Concatenation comes from the UDH when esm_class carries UDHI, otherwise
    from the sar_* optional parameters if the SMSC sent those.
    """
    user_data = pdu.short_message or getattr(pdu, 'message_payload', None) or b''
    if isinstance(user_data, str):
        user_data = user_data.encode('latin-1')
    esm_class = pdu.esm_class or 0
    data_coding = pdu.data_coding or 0

    if esm_class & EsmClassFlag.UDHI:
        udh, payload = split_user_data(user_data)
        concat = parse_concat_info(udh)
    else:
        payload = user_data
        concat = _sar_concat_info(pdu)

    return DeliverMessage(
        sequence=pdu.sequence,
        text=decode_text(payload, data_coding),
        concat=concat,
        source_addr=_text(pdu.source_addr),
        destination_addr=_text(pdu.destination_addr),
        is_receipt=bool(esm_class & EsmClassFlag.DELIVERY_RECEIPT),
    )


def pdu_to_event(pdu: Any) -> InboundPDU:
    """Convert an smpplib PDU into its inbound variant."""
    command = pdu.command
    if command == 'submit_sm_resp':
        message_id = getattr(pdu, 'message_id', None)
        return SubmitResponse(
            sequence=pdu.sequence,
            command_status=pdu.status,
            message_id=_text(message_id) if message_id is not None else None,
        )
    if command == 'deliver_sm':
        return decode_deliver_sm(pdu)
    if command == 'generic_nack':
        return GenericNack(sequence=pdu.sequence, command_status=pdu.status)
    if command == 'enquire_link_resp':
        return EnquireLinkResponse(sequence=pdu.sequence)
    if command == 'unbind_resp':
        return UnbindResponse(sequence=pdu.sequence)
    return UnknownPDU(command=command, sequence=pdu.sequence, command_status=pdu.status)


class SMPPLibSession:
    """
    Transceiver session backed by smpplib.client.Client.

    Writes (submit_sm, responses, enquire_link, unbind) are serialised by a
    lock because the reader thread and the caller both send PDUs.
    """

    def __init__(
        self,
        config: SessionConfig,
        client_factory: Callable[..., Any] = smpplib.client.Client,
    ):
        """
        Initialize the session

        Args:
            config: Validated session configuration
            client_factory: smpplib Client class or a compatible factory
        """
        self.config = config
        self._client_factory = client_factory
        self._client: Optional[Any] = None
        self._send_lock = threading.Lock()
        self._close_lock = threading.Lock()
        self._closing = threading.Event()
        # set once the reader has seen unbind_resp or stopped
        self._reader_released = threading.Event()
        self._reader: Optional[threading.Thread] = None
        self._bound = False

        # Event handlers
        self.on_pdu: Optional[PDUHandler] = None
        self.on_closed: Optional[Callable[[], None]] = None

    @property
    def is_bound(self) -> bool:
        return self._bound and not self._closing.is_set()

    def _ssl_context(self) -> ssl.SSLContext:
        context = ssl.create_default_context()
        if self.config.tls_insecure:
            context.check_hostname = False
            context.verify_mode = ssl.CERT_NONE
        return context

    def connect(self) -> None:
        """Connect, bind as transceiver and start the reader thread."""
        config = self.config
        kwargs: Dict[str, Any] = {
            'timeout': config.enquire_link_interval,
            # vendor TLVs on deliver_sm are skipped
            'allow_unknown_opt_params': True,
        }
        if config.tls:
            kwargs['ssl_context'] = self._ssl_context()

        logger.info(
            f'Connecting to SMSC at {config.address} as {config.system_id} '
            f'(password {mask_sensitive_data(config.password, "password")}, '
            f'tls={config.tls})'
        )
        try:
            self._client = self._client_factory(config.host, config.port, **kwargs)
            self._client.connect()
            self._client.bind_transceiver(
                system_id=config.system_id,
                password=config.password,
                system_type=config.system_type,
            )
        except (smpplib.exceptions.ConnectionError, smpplib.exceptions.PDUError, OSError) as e:
            raise SMPPSessionException(
                f'Unable to establish SMPP session: {e}',
                host=config.host,
                port=config.port,
                operation='bind_transceiver',
                original_error=e,
            ) from e

        self._bound = True
        self._closing.clear()
        self._reader_released.clear()
        self._reader = threading.Thread(
            target=self._read_loop, name='smpp-reader', daemon=True
        )
        self._reader.start()
        logger.info('Bound as transceiver')

    def submit(
        self, test_case: TestCase, on_sequence: Optional[SequenceCallback] = None
    ) -> int:
        """
        Send a submit_sm for a test case.

        Returns:
            The submit_sm sequence number

        Raises:
            SMPPSessionException: If the session is not bound or the send fails
            SMPPEncodingException: If the short message cannot be encoded
        """
        if not self.is_bound or self._client is None:
            raise SMPPSessionException('Session not connected', operation='submit_sm')

        params = build_submit_params(
            test_case.input_pdu,
            default_source=self.config.source_addr,
            default_destination=self.config.dest_addr,
        )
        try:
            pdu = smpplib.smpp.make_pdu('submit_sm', client=self._client, **params)
            if on_sequence is not None:
                on_sequence(pdu.sequence)
            self._send(pdu)
        except (
            smpplib.exceptions.ConnectionError,
            smpplib.exceptions.PDUError,
            struct.error,
            ValueError,
            OSError,
        ) as e:
            raise SMPPSessionException(
                f'SubmitPDU error: {e}',
                host=self.config.host,
                port=self.config.port,
                operation='submit_sm',
                original_error=e,
            ) from e

        logger.debug(
            f'Submitted test case {test_case.test_case_id} as sequence {pdu.sequence}'
        )
        return pdu.sequence

    def close(self) -> None:
        """Unbind if still bound, disconnect and stop the reader thread."""
        with self._close_lock:
            if self._closing.is_set() or self._client is None:
                return
            self._closing.set()

        on_reader = self._reader is threading.current_thread()
        if self._bound:
            self._bound = False
            try:
                self._send(smpplib.smpp.make_pdu('unbind', client=self._client))
            except (smpplib.exceptions.ConnectionError, smpplib.exceptions.PDUError, OSError) as e:
                logger.warning(f'Error during unbind: {e}')
            else:
                # The reader picks up unbind_resp; it cannot wait on itself.
                if not on_reader and not self._reader_released.wait(self.config.read_timeout):
                    logger.warning('No unbind_resp received from SMSC')

        try:
            self._client.disconnect()
        except (smpplib.exceptions.ConnectionError, OSError) as e:
            logger.warning(f'Error during disconnect: {e}')

        reader = self._reader
        if reader is not None and not on_reader:
            reader.join(timeout=self.config.read_timeout)

        logger.info('SMPP session closed')
        if self.on_closed:
            try:
                self.on_closed()
            except Exception as e:
                logger.exception(f'Error in close handler: {e}')

    def _send(self, pdu: Any) -> None:
        with self._send_lock:
            self._client.send_pdu(pdu)

    def _respond(self, command: str, sequence: int) -> None:
        self._send(smpplib.smpp.make_pdu(command, client=self._client, sequence=sequence))

    def _read_loop(self) -> None:
        try:
            self._read_until_closed()
        finally:
            self._reader_released.set()

        if not self._closing.is_set():
            self._bound = False
            self.close()

    def _read_until_closed(self) -> None:
        while not self._closing.is_set():
            try:
                pdu = self._client.read_pdu()
            except socket.timeout:
                if self._closing.is_set():
                    break
                try:
                    self._send(smpplib.smpp.make_pdu('enquire_link', client=self._client))
                except (smpplib.exceptions.ConnectionError, smpplib.exceptions.PDUError, OSError) as e:
                    logger.error(f'Enquire link failed: {e}')
                    break
                continue
            except smpplib.exceptions.UnknownCommandError as e:
                logger.warning(f'Received PDU with unknown command: {e}')
                self._deliver(UnknownPDU(command='unknown'))
                continue
            except smpplib.exceptions.PDUError as e:
                logger.error(f'Receiving PDU error: {e}')
                continue
            except (smpplib.exceptions.ConnectionError, OSError) as e:
                if not self._closing.is_set():
                    logger.error(f'Receiving PDU/Network error: {e}')
                break

            try:
                self._handle_pdu(pdu)
            except (smpplib.exceptions.ConnectionError, smpplib.exceptions.PDUError, OSError) as e:
                logger.error(f'Error answering {pdu.command}: {e}')
                break

            if pdu.command == 'unbind_resp':
                break

    def _handle_pdu(self, pdu: Any) -> None:
        command = pdu.command
        if command == 'enquire_link':
            self._respond('enquire_link_resp', pdu.sequence)
            return
        if command == 'unbind':
            logger.info('Unbind received from SMSC')
            self._bound = False
            self._respond('unbind_resp', pdu.sequence)
            self.close()
            return
        if command == 'deliver_sm':
            self._respond('deliver_sm_resp', pdu.sequence)
        elif command == 'unbind_resp':
            self._bound = False

        self._deliver(pdu_to_event(pdu))

    def _deliver(self, event: InboundPDU) -> None:
        if self.on_pdu is None:
            return
        try:
            self.on_pdu(event)
        except Exception as e:
            logger.exception(f'Error in PDU handler: {e}')
