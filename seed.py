from scholarly import create_app
from scholarly.session import HubSession
from scholarly.store import get_store
from scholarly.models import Role
from scholarly import operations as ops


def seed_database():
    app = create_app()
    with app.app_context():
        store = get_store()
        hubs = store.load()

        print("Creating hub...")
        hubs, hub = ops.create_hub(
            hubs,
            name='Scholarly Demo Academy',
            description='A sandbox school for trying out rooms and resources.',
            student_passphrase='STUDENT',
            admin_passphrase='FACULTY',
        )

        staff = HubSession()
        staff.enter(hub.id, Role.ADMIN)

        print("Creating rooms...")
        hubs, biology = ops.create_room(hubs, staff, hub.id, name='Advanced Biology', teacher='Dr. Rivera')
        hubs, history = ops.create_room(hubs, staff, hub.id, name='World History', teacher='Mr. Okafor')

        print("Publishing resources...")
        hubs, _ = ops.publish_resource(
            hubs, staff, hub.id, biology.id,
            type='DOCUMENT',
            title='Cell Structure Notes',
            description='Chapter 3 summary with labelled diagrams.',
            url='https://example.com/biology/cells.pdf',
        )
        hubs, _ = ops.publish_resource(
            hubs, staff, hub.id, biology.id,
            type='VIDEO',
            title='Weekly Lab Session',
            description='Live lab walkthrough every Thursday.',
            url='https://zoom.us/j/1234567890',
        )
        hubs, _ = ops.publish_resource(
            hubs, staff, hub.id, history.id,
            type='ANNOUNCEMENT',
            title='Essay Deadline Moved',
            description='The industrial revolution essay is now due next Friday.',
        )
        hubs, _ = ops.publish_resource(
            hubs, staff, hub.id, history.id,
            type='TIMETABLE',
            title='Term Schedule',
            description='Lectures Monday and Wednesday, seminars on Friday.',
        )

        ops.commit(store, hubs)

        print("Seed complete!")
        print(f"  Hub: {hub.name} ({hub.id})")
        print("  Student code: STUDENT")
        print("  Staff code:   FACULTY")


if __name__ == '__main__':
    seed_database()
