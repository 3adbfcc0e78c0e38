"""
Script para crear usuarios de prueba y emitir tokens de desarrollo
Ejecutar desde la raíz del proyecto: python scripts/create_test_users.py
"""
from datetime import datetime

from app.config.database import SessionLocal, init_db
from app.core.auth.service import IdentityVerifier
from app.shared.database.models import Rider, User

TEST_USERS = [
    {"email": "admin@zapshift.com", "name": "Ana Admin", "role": "admin"},
    {"email": "merchant@zapshift.com", "name": "Rahim Merchant", "role": "user"},
    {"email": "rider@zapshift.com", "name": "Jamal Rider", "role": "rider"},
]

def create_test_users():
    """Crear un usuario por rol y el perfil activo del repartidor"""
    init_db()
    db = SessionLocal()

    try:
        existing_users = db.query(User).count()
        if existing_users > 0:
            print(f"✅ Ya existen {existing_users} usuarios en la base de datos")
            return

        now = datetime.now()
        for user_data in TEST_USERS:
            db.add(User(**user_data, created_at=now))
            print(f"✅ Usuario creado: {user_data['email']} ({user_data['role']})")

        db.add(Rider(
            name="Jamal Rider",
            email="rider@zapshift.com",
            phone="01700000000",
            region="Dhaka",
            district="Dhaka",
            status="active",
            work_status="available",
            created_at=now
        ))
        db.commit()
        print("✅ Repartidor activo creado en Dhaka")

    except Exception as e:
        db.rollback()
        print(f"❌ Error creando usuarios: {e}")
        raise
    finally:
        db.close()

def print_dev_tokens():
    """Tokens firmados con la clave local, para probar con curl o /docs"""
    verifier = IdentityVerifier.from_settings()
    print("\n🔐 Tokens de desarrollo:")
    for user_data in TEST_USERS:
        print(f"   {user_data['email']}: Bearer {verifier.issue_token(user_data['email'])}")

if __name__ == "__main__":
    create_test_users()
    print_dev_tokens()
