"""Static local food database."""

from dataclasses import dataclass, field

from nutriflow.domain.foods import FoodCandidate

DEFAULT_FOODS: tuple[FoodCandidate, ...] = (
    FoodCandidate(name="Pechuga de Pollo (100g)", cal=165, p=31, c=0, g=3.6),
    FoodCandidate(name="Salmón a la plancha (100g)", cal=208, p=20, c=0, g=13),
    FoodCandidate(name="Huevos (2 unidades)", cal=155, p=13, c=1, g=11),
    FoodCandidate(name="Arroz Blanco (100g)", cal=130, p=2.7, c=28, g=0.3),
    FoodCandidate(name="Aguacate (1/2 unidad)", cal=160, p=2, c=8.5, g=14.7),
    FoodCandidate(name="Manzana (1 mediano)", cal=52, p=0.3, c=14, g=0.2),
    FoodCandidate(name="Batata/Camote (100g)", cal=86, p=1.6, c=20, g=0.1),
)


@dataclass
class FoodDatabase:
    """Read-only list of foods searched by name."""

    foods: tuple[FoodCandidate, ...] = field(default=DEFAULT_FOODS)

    def search(self, query: str | None) -> list[FoodCandidate]:
        """Return foods whose name contains the query, case-insensitively."""
        if not query:
            return []
        needle = query.lower()
        return [food for food in self.foods if needle in food.name.lower()]
