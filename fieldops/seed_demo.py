# fieldops/seed_demo.py
from datetime import datetime, timedelta

from fieldops.db import SessionLocal, Base, engine
from fieldops.models import Assignment, Store, VehiclePresence, Worker

Base.metadata.create_all(bind=engine)
db = SessionLocal()

# Workers
db.add_all([Worker(name=n) for n in ("Ion Popescu", "Andrei Ionescu", "Mihai Stan")])

# Stores
db.add_all([
    Store(store_id=101, description="Market Militari", city="Bucuresti", county="Bucuresti"),
    Store(store_id=102, description="Market Ploiesti Nord", city="Ploiesti", county="Prahova"),
])

# One assignment with a full presence trace (leave 08:15, back 13:40)
created = datetime.utcnow().replace(hour=8, minute=0, second=0, microsecond=0)
db.add(Assignment(
    type="Interventie",
    team_lead="Ion Popescu",
    members=["Andrei Ionescu"],
    car_plate="B 135 XOX",
    store_number="101",
    store_points=["102"],
    city="Bucuresti",
    county="Bucuresti",
    start_date=created,
    created_at=created,
))
trace = [(-10, True), (15, False), (60, False), (200, False), (340, True), (360, True)]
db.add_all([
    VehiclePresence(car_plate="B 135 XOX", timestamp=created + timedelta(minutes=m), was_near_base=near)
    for m, near in trace
])

db.commit()
db.close()
print("Seeded: 3 workers, 2 stores, 1 assignment, 6 presence samples.")
