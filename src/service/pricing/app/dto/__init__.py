"""Pricing Application DTOs"""

from src.service.pricing.app.dto.catalog_dto import SeatSnapshot, ShowtimeSnapshot

__all__ = ['SeatSnapshot', 'ShowtimeSnapshot']
