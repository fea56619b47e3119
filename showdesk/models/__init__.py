
from showdesk.models.show import Show, ShowImage, SCENE_IMAGE, CROP_PREFIX
from showdesk.models.setting import Setting
