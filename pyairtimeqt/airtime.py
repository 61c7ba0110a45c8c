"""LoRa time-on-air computation.

Implements the Semtech time-on-air formulas for the sub-GHz radios
(SX126x/SX127x, AN1200.13) and for the 2.4 GHz radios (SX1280).

Typical usage:

    airtime_ms = calculate_airtime(
        payload_size=25,
        spreading_factor=7,
        bandwidth=125,
        coding_rate=CodingRate.CR_4_5,
        radio_mode=RadioMode.LORA,
        preamble_length=8,
        explicit_header=True,
        low_data_rate_optimize=False,
        crc=True,
    )
"""

from __future__ import annotations

import math

from .models import CodingRate, RadioMode


def symbol_duration(spreading_factor: int, bandwidth: float) -> float:
    """Duration of one LoRa symbol in milliseconds.

    Args:
        spreading_factor: Spreading factor, 5..12.
        bandwidth: Bandwidth in kHz.
    """
    return (2 ** spreading_factor) / bandwidth


def _payload_symbols_sub_ghz(
    payload_size: int,
    spreading_factor: int,
    cr: int,
    explicit_header: bool,
    low_data_rate_optimize: bool,
    crc: bool,
) -> int:
    de = 1 if low_data_rate_optimize else 0
    ih = 0 if explicit_header else 1
    numerator = 8 * payload_size - 4 * spreading_factor + 28 + 16 * int(crc) - 20 * ih
    denominator = 4 * (spreading_factor - 2 * de)
    return 8 + max(math.ceil(numerator / denominator) * (cr + 4), 0)


def _payload_symbols_2g4(
    payload_size: int,
    spreading_factor: int,
    cr: int,
    explicit_header: bool,
    crc: bool,
) -> float:
    header_bits = 20 if explicit_header else 0
    bits = 8 * payload_size + 16 * int(crc) - 4 * spreading_factor + header_bits

    if spreading_factor < 7:
        # SF5 and SF6 use a longer sync word and no extra header offset
        blocks = math.ceil(max(bits, 0) / (4 * spreading_factor))
        return 2 + 8 + blocks * (cr + 4)
    if spreading_factor <= 10:
        blocks = math.ceil(max(bits + 8, 0) / (4 * spreading_factor))
        return 8 + blocks * (cr + 4)
    blocks = math.ceil(max(bits + 8, 0) / (4 * (spreading_factor - 2)))
    return 8 + blocks * (cr + 4)


def calculate_airtime(
    payload_size: int,
    spreading_factor: int,
    bandwidth: float,
    coding_rate: CodingRate,
    radio_mode: RadioMode,
    preamble_length: int,
    explicit_header: bool,
    low_data_rate_optimize: bool,
    crc: bool,
) -> float:
    """Compute the time on air of a LoRa frame.

    Long-interleaving coding rates use the symbol count of their standard
    counterpart.

    Args:
        payload_size: PHYPayload size in bytes.
        spreading_factor: Spreading factor, 5..12 (6..12 for sub-GHz).
        bandwidth: Bandwidth in kHz.
        coding_rate: Coding rate; long interleaving only for 2.4 GHz.
        radio_mode: Modulation family selecting the formula.
        preamble_length: Number of programmed preamble symbols.
        explicit_header: Whether the frame has an explicit header.
        low_data_rate_optimize: Low data rate optimization (sub-GHz only).
        crc: Whether the payload CRC is present.

    Returns:
        Airtime in milliseconds.

    Raises:
        ValueError: If a parameter is outside its valid domain.
    """
    if payload_size < 0:
        raise ValueError(f"payload_size must be >= 0, got {payload_size}")
    if bandwidth <= 0:
        raise ValueError(f"bandwidth must be positive, got {bandwidth}")

    ts = symbol_duration(spreading_factor, bandwidth)
    cr = coding_rate.cr

    if radio_mode is RadioMode.LORA:
        if not 6 <= spreading_factor <= 12:
            raise ValueError(f"spreading_factor must be 6..12, got {spreading_factor}")
        if coding_rate.long_interleaving:
            raise ValueError(f"coding rate {coding_rate.value} requires 2.4 GHz radio mode")
        n_payload = _payload_symbols_sub_ghz(
            payload_size,
            spreading_factor,
            cr,
            explicit_header,
            low_data_rate_optimize,
            crc,
        )
        return (preamble_length + 4.25 + n_payload) * ts

    if not 5 <= spreading_factor <= 12:
        raise ValueError(f"spreading_factor must be 5..12, got {spreading_factor}")
    n_payload = _payload_symbols_2g4(
        payload_size, spreading_factor, cr, explicit_header, crc
    )
    return (preamble_length + 4.25 + n_payload) * ts
