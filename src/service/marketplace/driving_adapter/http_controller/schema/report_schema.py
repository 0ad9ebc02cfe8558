from decimal import Decimal
from typing import Dict, List, Optional

from pydantic import BaseModel

from src.service.marketplace.domain.sales_report_domain import (
    BuyerRecord,
    CheckInStats,
    EventReport,
    PlatformReport,
)
from src.service.marketplace.driving_adapter.http_controller.schema.order_schema import BuyerSchema


class BuyerRecordResponse(BaseModel):
    order_id: str
    purchase_id: str
    quantity: int
    ticket_type_name: Optional[str]
    status: str
    buyer: BuyerSchema

    @classmethod
    def from_record(cls, record: BuyerRecord) -> 'BuyerRecordResponse':
        return cls(
            order_id=record.order_id,
            purchase_id=record.purchase_id,
            quantity=record.quantity,
            ticket_type_name=record.ticket_type_name,
            status=record.status.value,
            buyer=BuyerSchema.from_entity(record.buyer),
        )


class TicketTypeSalesResponse(BaseModel):
    ticket_type_id: str
    name: str
    price: str
    total_tickets: int
    sold_tickets: int
    available_tickets: int
    revenue: str
    occupancy: Decimal


class CheckInStatsResponse(BaseModel):
    tickets_sold: int
    tickets_checked_in: int
    check_in_rate: Decimal

    @classmethod
    def from_stats(cls, stats: CheckInStats) -> 'CheckInStatsResponse':
        return cls(
            tickets_sold=stats.tickets_sold,
            tickets_checked_in=stats.tickets_checked_in,
            check_in_rate=stats.check_in_rate,
        )


class CityCount(BaseModel):
    city: str
    count: int


class EventReportResponse(BaseModel):
    event_id: str
    title: str
    total_tickets: int
    sold_tickets: int
    available_tickets: int
    occupancy: Decimal
    gross_revenue: str
    service_fees: str
    commission_rate: Decimal
    platform_commission: str
    organizer_net: str
    refunded_amount: str
    ticket_types: List[TicketTypeSalesResponse]
    purchase_channels: Dict[str, int]
    genders: Dict[str, int]
    age_groups: Dict[str, int]
    top_cities: List[CityCount]
    check_in: CheckInStatsResponse

    @classmethod
    def from_report(cls, report: EventReport) -> 'EventReportResponse':
        return cls(
            event_id=report.event_id,
            title=report.title,
            total_tickets=report.total_tickets,
            sold_tickets=report.sold_tickets,
            available_tickets=report.available_tickets,
            occupancy=report.occupancy,
            gross_revenue=str(report.gross_revenue),
            service_fees=str(report.service_fees),
            commission_rate=report.commission_rate,
            platform_commission=str(report.platform_commission),
            organizer_net=str(report.organizer_net),
            refunded_amount=str(report.refunded_amount),
            ticket_types=[
                TicketTypeSalesResponse(
                    ticket_type_id=sales.ticket_type_id,
                    name=sales.name,
                    price=str(sales.price),
                    total_tickets=sales.total_tickets,
                    sold_tickets=sales.sold_tickets,
                    available_tickets=sales.available_tickets,
                    revenue=str(sales.revenue),
                    occupancy=sales.occupancy,
                )
                for sales in report.ticket_types
            ],
            purchase_channels=report.purchase_channels,
            genders=report.genders,
            age_groups=report.age_groups,
            top_cities=[CityCount(city=city, count=count) for city, count in report.top_cities],
            check_in=CheckInStatsResponse.from_stats(report.check_in),
        )


class EventRevenueResponse(BaseModel):
    event_id: str
    title: str
    organizer_id: Optional[str]
    category: str
    tickets_sold: int
    gross_revenue: str
    commission_rate: Decimal
    platform_commission: str
    organizer_net: str


class PlatformReportResponse(BaseModel):
    total_events: int
    events_with_sales: int
    tickets_sold: int
    gross_revenue: str
    service_fees: str
    platform_commission: str
    organizer_net: str
    refunded_amount: str
    average_ticket_price: str
    effective_commission_rate: Decimal
    revenue_by_category: Dict[str, str]
    top_events: List[EventRevenueResponse]

    @classmethod
    def from_report(cls, report: PlatformReport) -> 'PlatformReportResponse':
        return cls(
            total_events=report.total_events,
            events_with_sales=report.events_with_sales,
            tickets_sold=report.tickets_sold,
            gross_revenue=str(report.gross_revenue),
            service_fees=str(report.service_fees),
            platform_commission=str(report.platform_commission),
            organizer_net=str(report.organizer_net),
            refunded_amount=str(report.refunded_amount),
            average_ticket_price=str(report.average_ticket_price),
            effective_commission_rate=report.effective_commission_rate,
            revenue_by_category={
                category: str(revenue) for category, revenue in report.revenue_by_category.items()
            },
            top_events=[
                EventRevenueResponse(
                    event_id=row.event_id,
                    title=row.title,
                    organizer_id=row.organizer_id,
                    category=row.category,
                    tickets_sold=row.tickets_sold,
                    gross_revenue=str(row.gross_revenue),
                    commission_rate=row.commission_rate,
                    platform_commission=str(row.platform_commission),
                    organizer_net=str(row.organizer_net),
                )
                for row in report.top_events
            ],
        )
