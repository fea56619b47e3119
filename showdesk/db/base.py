
from showdesk.db.session import Base
from showdesk.models.show import Show, ShowImage
from showdesk.models.setting import Setting
