class CrawlerError(Exception):
    """ Base class of all errors raised inside the detection engine """


class AcquisitionFailure(CrawlerError):
    """ Browser could not be launched or the main page could not be loaded """


class NavigationFailure(CrawlerError):
    """ A login page navigation step failed """


class InteractionFailure(CrawlerError):
    """ A locator was not found or could not be clicked or filled """


class EvaluationFailure(CrawlerError):
    """ A script evaluated inside the page threw """


class SinkError(CrawlerError):
    """ A verdict could not be persisted as a link record """
