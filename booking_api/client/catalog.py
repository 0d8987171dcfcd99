from dataclasses import dataclass
from typing import List


@dataclass(frozen=True)
class Service:
    id: str
    label: str
    price: int
    duration_min: int
    description: str = ""
    featured: bool = True


SERVICES: List[Service] = [
    Service("house_call", "House Call", 50, 60, "Haircut at your location, zero travel on your part."),
    Service("regular_cut", "Regular Cut", 25, 45, "Clean taper/fade, detailed lineup, styled finish."),
    Service("regular_cut+beard", "Regular Cut + Beard", 30, 60, "Full fade with beard shape & hot towel."),
    Service("regular_cut+design", "Regular Cut + Design", 35, 60, "Regular cut with a custom design.", featured=False),
]

HOUSE_CALL_ID = "house_call"


def get_service(service_id: str) -> Service:
    for service in SERVICES:
        if service.id == service_id:
            return service
    return SERVICES[0]


def service_label(service: Service) -> str:
    """Label stored on the booking, price embedded: 'Regular Cut ($25)'."""
    return f"{service.label} (${service.price})"


def location_for(service: Service) -> str:
    return "House Call" if service.id == HOUSE_CALL_ID else "Barbershop"
