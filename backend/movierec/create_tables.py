from movierec.db import Base, get_engine
# Register every model on Base.metadata
from movierec import models  # noqa: F401

def main():
    """Create all database tables"""
    Base.metadata.create_all(bind=get_engine())
    print("All tables created successfully.")

if __name__ == "__main__":
    main()
