"""
Importa todos los modelos para registrar sus tablas en Base.metadata
"""
import app.modules.auth.models  # noqa: F401
import app.modules.customers.models  # noqa: F401
import app.modules.vehicles.models  # noqa: F401
import app.modules.jobs.models  # noqa: F401
import app.modules.invoices.models  # noqa: F401
import app.modules.service_history.models  # noqa: F401
import app.modules.comments.models  # noqa: F401
import app.modules.catalog.models  # noqa: F401
import app.modules.notifications.models  # noqa: F401
import app.modules.settings.models  # noqa: F401
