# scripts/render_setup.py
"""
Setup inicial en Render: crear tablas y promover al primer administrador
Uso: ADMIN_EMAIL=ops@zapshift.com python scripts/render_setup.py
"""
import os
from datetime import datetime

from app.config.database import SessionLocal, init_db
from app.config.settings import settings
from app.shared.database.models import User

def setup_database() -> bool:
    """Crear colecciones y asegurar que ADMIN_EMAIL tenga rol admin"""
    admin_email = os.getenv("ADMIN_EMAIL")
    if not admin_email:
        print("❌ ADMIN_EMAIL no encontrada")
        return False

    print(f"🔧 Configurando base de datos: {settings.database_url.split('@')[-1]}")
    init_db()
    print("✅ Tablas creadas")

    db = SessionLocal()
    try:
        user = db.query(User).filter(User.email == admin_email).first()
        if user is None:
            db.add(User(email=admin_email, role="admin", created_at=datetime.now()))
            print(f"✅ Administrador creado: {admin_email}")
        else:
            user.role = "admin"
            print(f"✅ Usuario promovido a admin: {admin_email}")
        db.commit()
        print("🎉 Setup completado exitosamente")
        return True
    except Exception as e:
        db.rollback()
        print(f"❌ Error en setup: {e}")
        return False
    finally:
        db.close()

if __name__ == "__main__":
    raise SystemExit(0 if setup_database() else 1)
