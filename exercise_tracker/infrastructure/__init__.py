"""Infrastructure — database session management, SQL repositories, logging setup."""
