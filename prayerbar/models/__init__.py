from prayerbar.models.output import BarOutput

__all__ = ["BarOutput"]
